"""
Shared test fixtures and configuration.
"""

from __future__ import annotations

import io
import logging
import tarfile
import zipfile
from pathlib import Path
from typing import Callable

import pytest

from ghr_installer.adapters.mock import MockReleaseClient
from ghr_installer.core.services.release_install.context import InstallContext
from ghr_installer.core.services.release_install.domain.platform import HostPlatform

FileMap = dict[str, "bytes | tuple[bytes, int]"]


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """Undo any setup_logging() call made by a test (CLI invocations included)."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    raise_exceptions = logging.raiseExceptions
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.raiseExceptions = raise_exceptions


@pytest.fixture
def linux_amd64() -> HostPlatform:
    return HostPlatform(os="linux", arch="amd64")


@pytest.fixture
def mock_client() -> MockReleaseClient:
    return MockReleaseClient()


@pytest.fixture
def progress_lines() -> list[str]:
    """Collects advisory progress output."""
    return []


@pytest.fixture
def install_ctx(
    tmp_path: Path,
    mock_client: MockReleaseClient,
    linux_amd64: HostPlatform,
    progress_lines: list[str],
) -> InstallContext:
    return InstallContext(
        base_directory=tmp_path / "base",
        client=mock_client,
        platform=linux_amd64,
        progress=progress_lines.append,
    )


def _split(value) -> tuple[bytes, int]:
    if isinstance(value, tuple):
        return value
    return value, 0o644


@pytest.fixture
def make_tar() -> Callable[..., bytes]:
    """Build a tar archive in memory.

    Entries are written in order: directories, files, symlinks, hard links.
    """

    def _make(
        files: FileMap,
        *,
        compression: str = "gz",
        dirs: tuple[str, ...] = (),
        symlinks: dict[str, str] | None = None,
        hardlinks: dict[str, str] | None = None,
    ) -> bytes:
        buf = io.BytesIO()
        mode = f"w:{compression}" if compression else "w"
        with tarfile.open(fileobj=buf, mode=mode) as tar:
            for name in dirs:
                info = tarfile.TarInfo(name)
                info.type = tarfile.DIRTYPE
                info.mode = 0o755
                tar.addfile(info)
            for name, value in files.items():
                content, file_mode = _split(value)
                info = tarfile.TarInfo(name)
                info.size = len(content)
                info.mode = file_mode
                tar.addfile(info, io.BytesIO(content))
            for name, target in (symlinks or {}).items():
                info = tarfile.TarInfo(name)
                info.type = tarfile.SYMTYPE
                info.linkname = target
                tar.addfile(info)
            for name, target in (hardlinks or {}).items():
                info = tarfile.TarInfo(name)
                info.type = tarfile.LNKTYPE
                info.linkname = target
                tar.addfile(info)
        return buf.getvalue()

    return _make


@pytest.fixture
def make_zip() -> Callable[..., bytes]:
    """Build a zip archive in memory; symlinks are stored Unix-style."""

    def _make(files: FileMap, *, symlinks: dict[str, str] | None = None) -> bytes:
        buf = io.BytesIO()
        with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for name, value in files.items():
                content, file_mode = _split(value)
                info = zipfile.ZipInfo(name)
                info.external_attr = (0o100000 | file_mode) << 16
                info.compress_type = zipfile.ZIP_DEFLATED
                zf.writestr(info, content)
            for name, target in (symlinks or {}).items():
                info = zipfile.ZipInfo(name)
                info.external_attr = (0o120000 | 0o777) << 16
                zf.writestr(info, target)
        return buf.getvalue()

    return _make
