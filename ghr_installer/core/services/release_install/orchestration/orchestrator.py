"""
L5 Orchestration — The install pipeline.

    parse spec → resolve metadata → match asset → download package
      → [download manifest → classify scope]
      → (global) verify downloads → extract → (content) verify install tree

Every stage is idempotent against what earlier runs left on disk, so
a second install of an unchanged release touches neither the network
nor the install tree and reports ``changed=False``.  Any stage error
propagates unchanged; nothing is rolled back.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any

from ghr_installer.core.models.release import (
    ChecksumScope,
    ManifestMatch,
    MatchResult,
    PackageSpec,
)
from ghr_installer.core.services.release_install.context import InstallContext
from ghr_installer.core.services.release_install.domain.asset_matching import AssetMatcher
from ghr_installer.core.services.release_install.domain.package_spec import parse_package_spec
from ghr_installer.core.services.release_install.execution.checksum_verify import (
    ChecksumEngine,
    load_manifest,
)
from ghr_installer.core.services.release_install.execution.download import download_asset
from ghr_installer.core.services.release_install.execution.extract import extract_archive
from ghr_installer.core.services.release_install.execution.release_cache import (
    resolve_release_metadata,
)

logger = logging.getLogger(__name__)


@dataclass
class ResolveResult:
    """What ``install`` would fetch for a spec on this host."""

    spec: str
    platform: str
    package_asset: str
    package_url: str
    base_name: str
    manifest_asset: str | None = None
    scope: str | None = None
    algorithm: str | None = None
    metadata_changed: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class InstallResult:
    """Outcome of one install run."""

    spec: str
    package_asset: str
    base_name: str
    install_dir: str
    manifest_asset: str | None = None
    scope: str | None = None
    algorithm: str | None = None
    verified: int = 0
    extracted: int = 0
    metadata_changed: bool = False
    package_downloaded: bool = False
    manifest_downloaded: bool = False

    @property
    def changed(self) -> bool:
        return (
            self.metadata_changed
            or self.package_downloaded
            or self.manifest_downloaded
            or self.extracted > 0
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["changed"] = self.changed
        return data


def _as_spec(package_spec: str | PackageSpec) -> PackageSpec:
    if isinstance(package_spec, PackageSpec):
        return package_spec
    return parse_package_spec(package_spec)


def _match(
    ctx: InstallContext, spec: PackageSpec,
) -> tuple[MatchResult, ManifestMatch | None, bool]:
    release, metadata_changed = resolve_release_metadata(ctx, spec)
    matcher = AssetMatcher(spec, ctx.platform)
    package = matcher.select_package(release.assets)
    manifest = matcher.select_manifest(release.assets, package.base_name)
    return package, manifest, metadata_changed


def resolve_package(ctx: InstallContext, package_spec: str | PackageSpec) -> ResolveResult:
    """Run the pipeline up to scope classification; downloads nothing.

    Fills the release metadata cache if it is empty.
    """
    spec = _as_spec(package_spec)
    package, manifest, metadata_changed = _match(ctx, spec)
    return ResolveResult(
        spec=str(spec),
        platform=str(ctx.platform),
        package_asset=package.asset.name,
        package_url=package.asset.download_url,
        base_name=package.base_name,
        manifest_asset=manifest.asset.name if manifest else None,
        scope=manifest.scope.value if manifest else None,
        algorithm=manifest.algorithm if manifest else None,
        metadata_changed=metadata_changed,
    )


def install_package(
    ctx: InstallContext,
    package_spec: str | PackageSpec,
    engine: ChecksumEngine | None = None,
) -> InstallResult:
    """Install one release asset into the keyed install directory.

    Args:
        ctx: Base directory, remote client, host platform, progress sink.
        package_spec: ``owner/project@version`` or an already parsed spec.
        engine: Checksum engine; defaults to the standard algorithm table.

    Returns:
        InstallResult; ``result.changed`` is False when nothing was
        fetched or extracted.

    Raises:
        InstallerError: Any stage failure, unchanged.
    """
    spec = _as_spec(package_spec)
    engine = engine or ChecksumEngine()
    logger.info("Installing %s for %s", spec, ctx.platform)

    package, manifest, metadata_changed = _match(ctx, spec)
    download_dir = ctx.download_dir(spec)
    install_dir = ctx.install_dir(spec)

    result = InstallResult(
        spec=str(spec),
        package_asset=package.asset.name,
        base_name=package.base_name,
        install_dir=str(install_dir),
        metadata_changed=metadata_changed,
    )

    package_path, result.package_downloaded = download_asset(
        ctx, spec, package.asset, download_dir,
    )

    checksums = None
    if manifest is not None:
        result.manifest_asset = manifest.asset.name
        result.scope = manifest.scope.value
        result.algorithm = manifest.algorithm
        manifest_path, result.manifest_downloaded = download_asset(
            ctx, spec, manifest.asset, download_dir, kind="checksums",
        )
        checksums = load_manifest(manifest_path, manifest.algorithm)
    else:
        logger.info("No checksum manifest published for %s", spec)

    if checksums is not None and manifest.scope is ChecksumScope.GLOBAL:
        ctx.report(spec, "verifying checksums...")
        result.verified = engine.verify(checksums, download_dir)

    ctx.report(spec, "installing...")
    result.extracted = extract_archive(package_path, install_dir)

    if checksums is not None and manifest.scope is ChecksumScope.CONTENT:
        ctx.report(spec, "verifying installed files...")
        result.verified = engine.verify(checksums, install_dir)

    logger.info(
        "Installed %s: %d entries extracted, %d checksums verified, changed=%s",
        spec, result.extracted, result.verified, result.changed,
    )
    return result
