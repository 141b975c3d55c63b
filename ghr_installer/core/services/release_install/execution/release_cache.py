"""
L4 Execution — Release metadata cache.

The release listing for one (owner, project, version) is fetched from
the remote API at most once and persisted as
``metadata/<host>/<owner>/<project>/<version>/repositoryRelease.json``.
Later runs read it back without any network call: tagged releases are
treated as immutable.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from ghr_installer.core.errors import IOFailureError
from ghr_installer.core.models.release import PackageSpec, ReleaseMetadata
from ghr_installer.core.services.release_install.context import InstallContext
from ghr_installer.core.services.release_install.data.constants import RELEASE_METADATA_FILE
from ghr_installer.core.services.release_install.execution.atomic import atomic_writer

logger = logging.getLogger(__name__)


def release_metadata_path(ctx: InstallContext, spec: PackageSpec) -> Path:
    return ctx.metadata_dir(spec) / RELEASE_METADATA_FILE


def load_release_metadata(path: Path) -> ReleaseMetadata | None:
    """Read cached metadata, or None if absent or unreadable as a release."""
    if not path.is_file():
        return None
    try:
        return ReleaseMetadata.model_validate_json(path.read_bytes())
    except ValidationError as e:
        logger.warning("Corrupt release metadata %s: %s; fetching again", path, e)
        return None
    except OSError as e:
        raise IOFailureError(f"cannot read {path}: {e}") from e


def save_release_metadata(release: ReleaseMetadata, path: Path) -> None:
    content = release.model_dump_json(indent=2) + "\n"
    try:
        with atomic_writer(path) as fh:
            fh.write(content.encode("utf-8"))
    except OSError as e:
        raise IOFailureError(f"cannot write {path}: {e}") from e


def resolve_release_metadata(ctx: InstallContext, spec: PackageSpec) -> tuple[ReleaseMetadata, bool]:
    """Return the release listing for ``spec``.

    Returns:
        ``(release, changed)`` where ``changed`` is True when the listing
        was fetched from the remote API during this call.

    Raises:
        NetworkFailureError: The remote lookup failed.
        IOFailureError: The cache could not be read or written.
    """
    path = release_metadata_path(ctx, spec)
    cached = load_release_metadata(path)
    if cached is not None:
        logger.debug("Using cached release metadata %s", path)
        return cached, False

    ctx.report(spec, f"fetching release {spec.tag}...")
    logger.info("Fetching release %s/%s@%s", spec.owner, spec.project, spec.tag)
    release = ctx.client.get_release_by_tag(spec.owner, spec.project, spec.tag)
    save_release_metadata(release, path)
    logger.info("Cached %d release assets to %s", len(release.assets), path)
    return release, True
