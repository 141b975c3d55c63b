"""
L4 Execution — Checksum verification.

Hashes files on disk and compares them against a parsed manifest.
Manifests usually list every platform's artifacts, so entries whose
file is absent locally are skipped rather than treated as failures.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
from pathlib import Path, PurePosixPath
from typing import Mapping

from ghr_installer.core.errors import (
    ChecksumMismatchError,
    IOFailureError,
    InvalidManifestError,
)
from ghr_installer.core.services.release_install.data.constants import CHUNK_SIZE, DIGEST_SIZES
from ghr_installer.core.services.release_install.domain.checksums import (
    ChecksumEntry,
    ChecksumManifest,
    detect_algorithm,
    parse_manifest,
)

logger = logging.getLogger(__name__)


def entry_path(directory: Path, filename: str) -> Path | None:
    """Where manifest entry ``filename`` lives under ``directory``.

    A leading ``/`` is dropped, as when joining paths.  Names with a
    ``..`` component, or that resolve outside ``directory`` through a
    symlink, get None: they are not under the directory.
    """
    pure = PurePosixPath(filename)
    parts = [p for p in pure.parts if p not in (pure.root, "", ".")]
    if not parts or ".." in parts:
        return None
    path = directory.joinpath(*parts)
    try:
        path.resolve().relative_to(directory.resolve())
    except ValueError:
        return None
    return path


def load_manifest(path: Path, algorithm: str | None = None) -> ChecksumManifest:
    """Read and parse a manifest file.

    Raises:
        InvalidManifestError: Not UTF-8, or a malformed line.
        IOFailureError: The file could not be read.
    """
    try:
        text = path.read_bytes().decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidManifestError(f"{path.name} is not UTF-8 text: {e}") from e
    except OSError as e:
        raise IOFailureError(f"cannot read {path}: {e}") from e
    return parse_manifest(text, algorithm)


class ChecksumEngine:
    """Digest computation and manifest verification."""

    def __init__(
        self,
        digest_sizes: Mapping[int, str] = DIGEST_SIZES,
        chunk_size: int = CHUNK_SIZE,
    ) -> None:
        self._digest_sizes = dict(digest_sizes)
        self._chunk_size = chunk_size

    def algorithm_for(self, manifest: ChecksumManifest, entry: ChecksumEntry) -> str:
        """Declared manifest algorithm, else inferred from the digest length."""
        if manifest.algorithm:
            return manifest.algorithm
        return detect_algorithm(entry.digest, self._digest_sizes)

    def digest_file(self, path: Path, algorithm: str) -> bytes:
        h = hashlib.new(algorithm)
        try:
            with open(path, "rb") as f:
                for chunk in iter(lambda: f.read(self._chunk_size), b""):
                    h.update(chunk)
        except OSError as e:
            raise IOFailureError(f"cannot read {path}: {e}") from e
        return h.digest()

    def verify(self, manifest: ChecksumManifest, directory: Path) -> int:
        """Verify every manifest entry present under ``directory``.

        Returns:
            Number of entries whose file existed and matched.

        Raises:
            ChecksumMismatchError: A present file's digest differs.
            UnknownDigestAlgorithmError: An entry's algorithm cannot be inferred.
        """
        verified = 0
        for entry in manifest.entries:
            path = entry_path(directory, entry.filename)
            if path is None:
                logger.debug("Checksum entry %s is outside %s", entry.filename, directory)
                continue
            if not path.is_file():
                logger.debug("Checksum entry %s not present in %s", entry.filename, directory)
                continue

            algorithm = self.algorithm_for(manifest, entry)
            actual = self.digest_file(path, algorithm)
            if not hmac.compare_digest(actual, entry.digest):
                raise ChecksumMismatchError(entry.filename, algorithm, entry.hex_digest, actual.hex())

            logger.debug("Checksum OK: %s (%s)", entry.filename, algorithm)
            verified += 1

        if verified == 0:
            logger.warning(
                "No entry of the checksum manifest (%d entries) matched a file in %s",
                len(manifest), directory,
            )
        return verified
