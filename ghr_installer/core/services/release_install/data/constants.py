"""
L0 Data — Module-level constants.

Pure data. No logic. No imports beyond stdlib.

Nothing here is mutated at runtime: the matcher and checksum engine
take these as constructor defaults, so callers that need a different
grammar pass their own tuples instead of patching module state.
"""

from __future__ import annotations

# Separators accepted between filename components (``proj_1.0.0-linux.amd64``).
DELIMITERS: tuple[str, ...] = (".", "-", "_")

# Archive suffixes a package asset may carry, in priority order.
ARCHIVE_EXTENSIONS: tuple[str, ...] = (
    ".tar.gz",
    ".tar.bz2",
    ".tar.xz",
    ".tar",
    ".zip",
    ".rar",
    ".7z",
)

# Supported digest algorithms (hashlib names).
HASH_ALGORITHMS: tuple[str, ...] = ("md5", "sha1", "sha224", "sha256", "sha384", "sha512")

# Raw digest byte length → algorithm.  Lengths are unique per algorithm.
DIGEST_SIZES: dict[int, str] = {
    16: "md5",
    20: "sha1",
    28: "sha224",
    32: "sha256",
    48: "sha384",
    64: "sha512",
}

# Manifest names recognised without any project context.
# ``checksums.txt`` is matched case-sensitively, the rest case-insensitively.
EXACT_MANIFEST_NAMES: dict[str, str | None] = {
    "checksums.txt": None,
}
CASELESS_MANIFEST_NAMES: dict[str, str | None] = {
    "shasums256.txt": "sha256",
    "shasums512.txt": "sha512",
    **{f"{alg}sums.txt": alg for alg in HASH_ALGORITHMS},
}

# Operating system normalisation: platform.system().lower() → release token.
OS_MAP: dict[str, str] = {
    "linux": "linux",
    "darwin": "darwin",
    "windows": "windows",
    "freebsd": "freebsd",
    "openbsd": "openbsd",
    "netbsd": "netbsd",
}

# Architecture normalisation: platform.machine() → Go-style release token.
ARCH_MAP: dict[str, str] = {
    "x86_64": "amd64",
    "AMD64": "amd64",      # Windows
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",      # macOS (Darwin reports arm64)
    "armv7l": "arm",
    "armv6l": "arm",
    "i386": "386",
    "i686": "386",
    "x86": "386",
    "ppc64le": "ppc64le",
    "s390x": "s390x",
    "riscv64": "riscv64",
}

# Extra tokens accepted for the 64-bit x86 family.
AMD64_ALIASES: tuple[str, ...] = ("64bit", "x64")

# ── On-disk cache layout (relative to the base directory) ──────

METADATA_DIR = "metadata"
DOWNLOADS_DIR = "downloads"
INSTALLS_DIR = "installs"
RELEASE_METADATA_FILE = "repositoryRelease.json"

# Copy buffer for hashing, downloading and extracting.
CHUNK_SIZE = 1024 * 1024
