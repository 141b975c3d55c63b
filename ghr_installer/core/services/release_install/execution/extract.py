"""
L4 Execution — Archive extraction.

Formats are identified by content, never by file name.  Resolution is
two-step: ``resolve_format`` looks at the head of a stream and answers
either ``Extractable`` (a container we can walk) or ``RequiresUnwrap``
(a compression layer, with a continuation that opens the inner
stream).  ``resolve_archive`` repeats that until it reaches a
container.

Extraction is resumable: entries whose output path already exists are
skipped, so re-running over a populated tree writes nothing.  There is
no rollback; whatever was materialized before a failure stays.
"""

from __future__ import annotations

import bz2
import gzip
import logging
import lzma
import os
import shutil
import stat
import tarfile
import tempfile
import zipfile
import zlib
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import BinaryIO, Callable, ContextManager, Iterator, Union

import zstandard

from ghr_installer.core.errors import (
    InstallerError,
    IOFailureError,
    UnsafeArchiveEntryError,
    UnsupportedArchiveError,
)
from ghr_installer.core.services.release_install.data.constants import CHUNK_SIZE

logger = logging.getLogger(__name__)

Opener = Callable[[], ContextManager[BinaryIO]]

HEAD_SIZE = 512
MAX_UNWRAP_DEPTH = 4

DEFAULT_DIR_MODE = 0o755
DEFAULT_FILE_MODE = 0o644

# ── Signatures ──

_TAR_MAGIC_OFFSET = 257
_TAR_MAGIC = b"ustar"
_ZIP_MAGICS = (b"PK\x03\x04", b"PK\x05\x06", b"PK\x07\x08")
_SEVEN_ZIP_MAGIC = b"7z\xbc\xaf\x27\x1c"
_RAR_MAGIC = b"Rar!\x1a\x07"

_GZIP_MAGIC = b"\x1f\x8b"
_BZIP2_MAGIC = b"BZh"
_XZ_MAGIC = b"\xfd7zXZ\x00"
_ZSTD_MAGIC = b"\x28\xb5\x2f\xfd"

# Decoder errors that mean "the bytes are not what the header claimed".
_CORRUPT_ERRORS = (
    tarfile.TarError,
    zipfile.BadZipFile,
    gzip.BadGzipFile,
    lzma.LZMAError,
    zlib.error,
    zstandard.ZstdError,
    EOFError,
)

# What a decompressing reader raises on a damaged stream.  bz2 and gzip
# report bad data as a plain OSError.
_DECODE_ERRORS = (OSError, EOFError, lzma.LZMAError, zlib.error, zstandard.ZstdError)


# ── Resolution ──


@dataclass(frozen=True)
class Extractable:
    """A container format we can walk entry by entry."""

    format: str
    opener: Opener


@dataclass(frozen=True)
class RequiresUnwrap:
    """A compression layer; ``continuation`` opens the decompressed stream."""

    decompressor: str
    continuation: Opener


Resolution = Union[Extractable, RequiresUnwrap]


def file_opener(path: Path) -> Opener:
    def _open() -> ContextManager[BinaryIO]:
        return open(path, "rb")
    return _open


def _read_head(fh: BinaryIO, size: int = HEAD_SIZE) -> bytes:
    # Decompressing readers may return short reads.
    buf = b""
    while len(buf) < size:
        chunk = fh.read(size - len(buf))
        if not chunk:
            break
        buf += chunk
    return buf


def _decompressing(name: str, raw: BinaryIO) -> BinaryIO:
    if name == "gzip":
        return gzip.GzipFile(fileobj=raw, mode="rb")
    if name == "bzip2":
        return bz2.BZ2File(raw, mode="rb")
    if name == "xz":
        return lzma.LZMAFile(raw, mode="rb")
    if name == "zstd":
        return zstandard.ZstdDecompressor().stream_reader(raw, closefd=False)
    raise UnsupportedArchiveError(f"no decompressor for {name}")


class _DecodedStream:
    """Read-only view of a decompression layer.

    Any decoder failure surfaces as ``UnsupportedArchiveError`` so that
    ``OSError`` escaping extraction always means the destination side.
    """

    def __init__(self, name: str, stream: BinaryIO) -> None:
        self._name = name
        self._stream = stream

    def read(self, size: int = -1) -> bytes:
        try:
            return self._stream.read(size)
        except _DECODE_ERRORS as e:
            raise UnsupportedArchiveError(f"corrupt {self._name} stream: {e}") from e

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return False

    def close(self) -> None:
        self._stream.close()


def _unwrap(opener: Opener, name: str) -> Opener:
    @contextmanager
    def _open() -> Iterator[BinaryIO]:
        with opener() as raw:
            stream = _DecodedStream(name, _decompressing(name, raw))
            try:
                yield stream
            finally:
                stream.close()
    return _open


def identify(head: bytes) -> tuple[str, str]:
    """Classify a stream head as ``("container", fmt)`` or ``("compression", name)``.

    Raises:
        UnsupportedArchiveError: Unknown signature, or a container
            format with no extractor (7z, rar).
    """
    if head[_TAR_MAGIC_OFFSET:_TAR_MAGIC_OFFSET + len(_TAR_MAGIC)] == _TAR_MAGIC:
        return "container", "tar"
    if head.startswith(_ZIP_MAGICS):
        return "container", "zip"
    if head.startswith(_SEVEN_ZIP_MAGIC):
        raise UnsupportedArchiveError("7z archives are recognised but cannot be extracted")
    if head.startswith(_RAR_MAGIC):
        raise UnsupportedArchiveError("rar archives are recognised but cannot be extracted")
    if head.startswith(_GZIP_MAGIC):
        return "compression", "gzip"
    if head.startswith(_BZIP2_MAGIC):
        return "compression", "bzip2"
    if head.startswith(_XZ_MAGIC):
        return "compression", "xz"
    if head.startswith(_ZSTD_MAGIC):
        return "compression", "zstd"
    raise UnsupportedArchiveError("unrecognised archive format")


def resolve_format(opener: Opener) -> Resolution:
    with opener() as fh:
        head = _read_head(fh)
    kind, name = identify(head)
    if kind == "container":
        return Extractable(name, opener)
    return RequiresUnwrap(name, _unwrap(opener, name))


def resolve_archive(opener: Opener, max_depth: int = MAX_UNWRAP_DEPTH) -> Extractable:
    """Peel compression layers until a container format is reached."""
    layers: list[str] = []
    for _ in range(max_depth + 1):
        resolved = resolve_format(opener)
        if isinstance(resolved, Extractable):
            logger.debug("Resolved archive format: %s", " -> ".join([*layers, resolved.format]))
            return resolved
        layers.append(resolved.decompressor)
        opener = resolved.continuation
    raise UnsupportedArchiveError(f"more than {max_depth} nested compression layers")


# ── Entries ──


FILE = "file"
DIRECTORY = "dir"
SYMLINK = "symlink"
HARDLINK = "hardlink"


@dataclass(frozen=True)
class ArchiveEntry:
    """One archive member.  ``open`` is only valid until the next entry is read."""

    name: str
    kind: str
    mode: int | None = None
    link_target: str = ""
    open: Callable[[], ContextManager[BinaryIO]] | None = None


def iter_tar_entries(fh: BinaryIO) -> Iterator[ArchiveEntry]:
    with tarfile.open(fileobj=fh, mode="r|") as tar:
        for member in tar:
            mode = stat.S_IMODE(member.mode) or None
            if member.issym():
                yield ArchiveEntry(member.name, SYMLINK, link_target=member.linkname)
            elif member.islnk():
                yield ArchiveEntry(member.name, HARDLINK, link_target=member.linkname)
            elif member.isdir():
                yield ArchiveEntry(member.name, DIRECTORY, mode)
            elif member.isfile():
                yield ArchiveEntry(
                    member.name, FILE, mode,
                    open=lambda m=member: tar.extractfile(m),
                )
            else:
                logger.debug("Skipping tar entry %s (type %r)", member.name, member.type)


@contextmanager
def _seekable(fh: BinaryIO) -> Iterator[BinaryIO]:
    if fh.seekable():
        yield fh
        return
    with tempfile.TemporaryFile() as spool:
        shutil.copyfileobj(fh, spool, CHUNK_SIZE)
        spool.seek(0)
        yield spool


def iter_zip_entries(fh: BinaryIO) -> Iterator[ArchiveEntry]:
    with _seekable(fh) as seekable, zipfile.ZipFile(seekable) as zf:
        for info in zf.infolist():
            unix_mode = info.external_attr >> 16
            mode = stat.S_IMODE(unix_mode) or None
            if stat.S_ISLNK(unix_mode):
                target = zf.read(info).decode("utf-8")
                yield ArchiveEntry(info.filename, SYMLINK, link_target=target)
            elif info.is_dir():
                yield ArchiveEntry(info.filename, DIRECTORY, mode)
            else:
                yield ArchiveEntry(
                    info.filename, FILE, mode,
                    open=lambda i=info: zf.open(i),
                )


_ENTRY_READERS: dict[str, Callable[[BinaryIO], Iterator[ArchiveEntry]]] = {
    "tar": iter_tar_entries,
    "zip": iter_zip_entries,
}


# ── Materialization ──


def output_path(root: Path, name: str) -> Path | None:
    """Where entry ``name`` lands under ``root``; None for the root itself.

    Raises:
        UnsafeArchiveEntryError: Absolute name, ``..`` component, or a
            parent that resolves outside ``root`` through a symlink.
    """
    pure = PurePosixPath(name)
    if pure.is_absolute() or ".." in pure.parts:
        raise UnsafeArchiveEntryError(f"archive entry {name!r} escapes the install directory")
    parts = [p for p in pure.parts if p not in ("", ".")]
    if not parts:
        return None

    dest = root.joinpath(*parts)
    try:
        dest.parent.resolve().relative_to(root.resolve())
    except ValueError:
        raise UnsafeArchiveEntryError(
            f"archive entry {name!r} resolves outside the install directory"
        ) from None
    return dest


def _write_file(entry: ArchiveEntry, dest: Path) -> None:
    flags = os.O_WRONLY | os.O_CREAT | os.O_EXCL | getattr(os, "O_BINARY", 0)
    fd = os.open(dest, flags, entry.mode or DEFAULT_FILE_MODE)
    try:
        with os.fdopen(fd, "wb") as out, entry.open() as src:
            shutil.copyfileobj(src, out, CHUNK_SIZE)
    except BaseException:
        dest.unlink(missing_ok=True)
        raise


def materialize(entry: ArchiveEntry, root: Path) -> bool:
    """Create ``entry`` under ``root`` unless its path exists. True if created."""
    dest = output_path(root, entry.name)
    if dest is None or os.path.lexists(dest):
        return False

    dest.parent.mkdir(parents=True, exist_ok=True)
    if entry.kind == DIRECTORY:
        # owner needs rwx to populate the tree
        dest.mkdir(mode=(entry.mode or DEFAULT_DIR_MODE) | 0o700)
    elif entry.kind == SYMLINK:
        os.symlink(entry.link_target, dest)
    elif entry.kind == HARDLINK:
        source = output_path(root, entry.link_target)
        if source is None:
            raise UnsafeArchiveEntryError(f"hard link {entry.name!r} points at the install root")
        os.link(source, dest)
    else:
        _write_file(entry, dest)
    return True


def extract_archive(archive_path: Path, install_dir: Path) -> int:
    """Extract ``archive_path`` into ``install_dir``.

    Returns:
        Number of entries newly materialized by this call.

    Raises:
        UnsupportedArchiveError: Unknown, unextractable or corrupt archive,
            including damaged compressed payloads.
        UnsafeArchiveEntryError: An entry would escape ``install_dir``.
        IOFailureError: Opening the archive or writing the tree failed.
    """
    extracted = 0
    try:
        target = resolve_archive(file_opener(archive_path))
        logger.info("Extracting %s (%s) into %s", archive_path.name, target.format, install_dir)
        install_dir.mkdir(parents=True, exist_ok=True)
        with target.opener() as fh:
            for entry in _ENTRY_READERS[target.format](fh):
                if materialize(entry, install_dir):
                    extracted += 1
                else:
                    logger.debug("Skipping existing entry %s", entry.name)
    except InstallerError:
        raise
    except _CORRUPT_ERRORS as e:
        raise UnsupportedArchiveError(f"corrupt archive {archive_path.name}: {e}") from e
    except OSError as e:
        raise IOFailureError(
            f"extraction of {archive_path.name} failed after {extracted} entries: {e}"
        ) from e

    logger.info("Extracted %d new entries from %s", extracted, archive_path.name)
    return extracted
