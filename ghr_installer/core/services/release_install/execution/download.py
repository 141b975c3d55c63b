"""
L4 Execution — Asset download cache.

Assets land in ``downloads/<host>/<owner>/<project>/<version>/<name>``.
An existing file is trusted as-is and never fetched again; integrity,
if a manifest exists, is checked later by the checksum engine.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ghr_installer.core.errors import IOFailureError
from ghr_installer.core.models.release import AssetDescriptor, PackageSpec
from ghr_installer.core.services.release_install.context import InstallContext
from ghr_installer.core.services.release_install.execution.atomic import atomic_writer

logger = logging.getLogger(__name__)


def asset_path(directory: Path, asset: AssetDescriptor) -> Path:
    """Destination of ``asset`` inside ``directory``.

    Raises:
        IOFailureError: The asset name is not a plain file name.
    """
    name = asset.name
    if not name or name in (".", "..") or "/" in name or "\\" in name:
        raise IOFailureError(f"refusing to store asset with unsafe name {name!r}")
    return directory / name


def download_asset(
    ctx: InstallContext,
    spec: PackageSpec,
    asset: AssetDescriptor,
    directory: Path,
    *,
    kind: str = "package",
) -> tuple[Path, bool]:
    """Download ``asset`` into ``directory`` unless it is already there.

    Args:
        kind: Label for progress output (``package``, ``checksums``).

    Returns:
        ``(path, changed)`` where ``changed`` is True when bytes were
        fetched during this call.

    Raises:
        NetworkFailureError: The remote fetch failed (no file is left behind).
        IOFailureError: The destination could not be written.
    """
    path = asset_path(directory, asset)
    if path.exists():
        ctx.report(spec, f"{kind} already downloaded...")
        logger.info("Skipping download of %s: %s exists", asset.name, path)
        return path, False

    ctx.report(spec, f"downloading {kind} ({asset.download_url})...")
    logger.info("Downloading %s to %s", asset.download_url, path)
    try:
        with atomic_writer(path) as fh:
            size = ctx.client.download(asset.download_url, fh)
    except OSError as e:
        raise IOFailureError(f"cannot write {path}: {e}") from e

    logger.info("Downloaded %s (%d bytes)", asset.name, size)
    return path, True
