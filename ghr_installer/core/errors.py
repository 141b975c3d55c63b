"""
Installer error taxonomy.

Every pipeline stage raises one of these and nothing else: raw
``OSError`` / ``urllib`` failures are wrapped at the stage boundary
(``raise ... from exc``) so callers only ever catch ``InstallerError``.

No stage retries.  Whatever an earlier stage already committed to disk
(cached metadata, downloaded files, extracted entries) stays in place,
so the next invocation resumes from the first unfinished stage.
"""

from __future__ import annotations


class InstallerError(Exception):
    """Base class for every fatal install pipeline error."""


class InvalidSpecError(InstallerError):
    """The ``owner/project@version`` string is malformed."""


class InvalidVersionError(InvalidSpecError):
    """The version part is not a strict semantic version."""


class NoMatchingAssetError(InstallerError):
    """No release asset matches this host's OS and architecture."""


class InvalidManifestError(InstallerError):
    """A checksum manifest line is not ``<hex>  <filename>``."""


class UnknownDigestAlgorithmError(InstallerError):
    """A digest length does not map to a supported hash algorithm."""


class ChecksumMismatchError(InstallerError):
    """A file's digest differs from the one listed in the manifest."""

    def __init__(self, filename: str, algorithm: str, expected: str, actual: str):
        super().__init__(
            f"checksum mismatch for {filename} ({algorithm}): "
            f"expected {expected}, got {actual}"
        )
        self.filename = filename
        self.algorithm = algorithm
        self.expected = expected
        self.actual = actual


class UnsupportedArchiveError(InstallerError):
    """The downloaded file is not an archive we can extract."""


class UnsafeArchiveEntryError(UnsupportedArchiveError):
    """An archive entry would land outside the install directory."""


class NetworkFailureError(InstallerError):
    """The remote API or an asset download failed."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class IOFailureError(InstallerError):
    """A local file-system operation failed."""
