"""
Install use case — config → client → context → pipeline.

The vertical slice behind ``ghri install`` and ``ghri resolve``.
Failures come back as ``result.error`` instead of exceptions so the
CLI can print them uniformly.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from ghr_installer.adapters.base import ReleaseClient
from ghr_installer.adapters.github import GitHubReleaseClient
from ghr_installer.core.config.loader import ConfigError, load_config
from ghr_installer.core.errors import InstallerError
from ghr_installer.core.models.config import InstallerConfig
from ghr_installer.core.services.release_install import (
    InstallContext,
    InstallResult,
    ResolveResult,
    install_package,
    resolve_package,
)
from ghr_installer.core.services.release_install.context import ProgressCallback, silent

logger = logging.getLogger(__name__)


@dataclass
class InstallRunResult:
    """Outcome of ``run_install``."""

    install: InstallResult | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return self.install.to_dict() if self.install else {}


@dataclass
class ResolveRunResult:
    """Outcome of ``run_resolve``."""

    resolved: ResolveResult | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return self.resolved.to_dict() if self.resolved else {}


def build_client(config: InstallerConfig) -> ReleaseClient:
    """GitHub client for ``config``; the token comes from ``$<token_env>``."""
    token = os.environ.get(config.token_env) or None
    logger.debug(
        "Using %s (%s)", config.api_url,
        "authenticated" if token else "anonymous",
    )
    return GitHubReleaseClient(
        config.api_url,
        token=token,
        timeout=config.timeout,
        user_agent=config.user_agent,
    )


def _context(
    base_directory: Path,
    config_path: Path | None,
    progress: ProgressCallback,
) -> InstallContext:
    config = load_config(config_path)
    return InstallContext(
        base_directory=Path(base_directory),
        client=build_client(config),
        host=config.host,
        progress=progress,
    )


def run_install(
    package_spec: str,
    base_directory: Path,
    config_path: Path | None = None,
    progress: ProgressCallback = silent,
) -> InstallRunResult:
    """Install ``owner/project@version`` under ``base_directory``."""
    try:
        ctx = _context(base_directory, config_path, progress)
        return InstallRunResult(install=install_package(ctx, package_spec))
    except (InstallerError, ConfigError) as e:
        logger.debug("Install of %s failed", package_spec, exc_info=True)
        return InstallRunResult(error=str(e))


def run_resolve(
    package_spec: str,
    base_directory: Path,
    config_path: Path | None = None,
    progress: ProgressCallback = silent,
) -> ResolveRunResult:
    """Report which assets ``install`` would use, downloading nothing."""
    try:
        ctx = _context(base_directory, config_path, progress)
        return ResolveRunResult(resolved=resolve_package(ctx, package_spec))
    except (InstallerError, ConfigError) as e:
        logger.debug("Resolve of %s failed", package_spec, exc_info=True)
        return ResolveRunResult(error=str(e))
