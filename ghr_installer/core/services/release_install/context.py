"""
Install context — everything a pipeline stage needs besides its inputs.

Passed explicitly into every stage; no stage holds it as ambient state.

Cache layout under ``base_directory`` (all segments literal)::

    metadata/<host>/<owner>/<project>/<version>/repositoryRelease.json
    downloads/<host>/<owner>/<project>/<version>/<asset name>
    installs/<host>/<owner>/<project>/<version>/<extracted entries>
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from ghr_installer.adapters.base import ReleaseClient
from ghr_installer.core.models.config import DEFAULT_HOST
from ghr_installer.core.models.release import PackageSpec
from ghr_installer.core.services.release_install.data.constants import (
    DOWNLOADS_DIR,
    INSTALLS_DIR,
    METADATA_DIR,
)
from ghr_installer.core.services.release_install.domain.platform import HostPlatform

ProgressCallback = Callable[[str], None]


def silent(_msg: str) -> None:
    return None


@dataclass(frozen=True)
class InstallContext:
    base_directory: Path
    client: ReleaseClient
    host: str = DEFAULT_HOST
    platform: HostPlatform = field(default_factory=HostPlatform.detect)
    progress: ProgressCallback = silent

    def _keyed(self, root: str, spec: PackageSpec) -> Path:
        return Path(self.base_directory) / root / self.host / spec.owner / spec.project / spec.version

    def metadata_dir(self, spec: PackageSpec) -> Path:
        return self._keyed(METADATA_DIR, spec)

    def download_dir(self, spec: PackageSpec) -> Path:
        return self._keyed(DOWNLOADS_DIR, spec)

    def install_dir(self, spec: PackageSpec) -> Path:
        return self._keyed(INSTALLS_DIR, spec)

    def report(self, spec: PackageSpec, message: str) -> None:
        """Emit an advisory progress line."""
        self.progress(f"[{spec}] {message}")
