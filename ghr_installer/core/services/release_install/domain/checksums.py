"""
L1 Domain — Checksum manifests (pure).

Wire format: UTF-8, one entry per line::

    <hex digest><two spaces><filename>

No comments, no blank lines.  The digest algorithm is either declared
by the manifest's asset name or inferred per entry from the raw digest
length.  No I/O, no subprocess.
"""

from __future__ import annotations

import binascii
from dataclasses import dataclass
from typing import Mapping

from ghr_installer.core.errors import InvalidManifestError, UnknownDigestAlgorithmError
from ghr_installer.core.services.release_install.data.constants import DIGEST_SIZES

SEPARATOR = "  "


@dataclass(frozen=True)
class ChecksumEntry:
    digest: bytes
    filename: str

    @property
    def hex_digest(self) -> str:
        return self.digest.hex()


@dataclass(frozen=True)
class ChecksumManifest:
    entries: tuple[ChecksumEntry, ...]
    algorithm: str | None = None

    def get_entry(self, filename: str) -> ChecksumEntry | None:
        for entry in self.entries:
            if entry.filename == filename:
                return entry
        return None

    def __len__(self) -> int:
        return len(self.entries)


def parse_manifest(text: str, algorithm: str | None = None) -> ChecksumManifest:
    """Parse manifest text.

    Raises:
        InvalidManifestError: A line does not split into exactly a digest
            and a filename, or the digest is not valid hex.
    """
    entries: list[ChecksumEntry] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        parts = line.split(SEPARATOR, 1)
        if len(parts) != 2 or not parts[0] or not parts[1]:
            raise InvalidManifestError(f"line {lineno}: expected '<digest>  <filename>', got {line!r}")
        hex_digest, filename = parts
        try:
            digest = binascii.unhexlify(hex_digest)
        except (binascii.Error, ValueError) as exc:
            raise InvalidManifestError(f"line {lineno}: invalid hex digest {hex_digest!r}") from exc
        entries.append(ChecksumEntry(digest=digest, filename=filename))
    return ChecksumManifest(entries=tuple(entries), algorithm=algorithm)


def detect_algorithm(digest: bytes, digest_sizes: Mapping[int, str] = DIGEST_SIZES) -> str:
    """Infer the hash algorithm from a raw digest length.

    Raises:
        UnknownDigestAlgorithmError: The length maps to no supported algorithm.
    """
    try:
        return digest_sizes[len(digest)]
    except KeyError:
        raise UnknownDigestAlgorithmError(
            f"cannot infer digest algorithm from a {len(digest)}-byte digest"
        ) from None
