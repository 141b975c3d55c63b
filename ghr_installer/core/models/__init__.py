"""
Domain models — Pydantic types for the installer.

All models are re-exported here for convenient access:

    from ghr_installer.core.models import PackageSpec, ReleaseMetadata, InstallerConfig
"""

from ghr_installer.core.models.config import InstallerConfig
from ghr_installer.core.models.release import (
    AssetDescriptor,
    ChecksumScope,
    ManifestMatch,
    MatchResult,
    PackageSpec,
    ReleaseMetadata,
)

__all__ = [
    # release.py
    "AssetDescriptor",
    "ChecksumScope",
    # config.py
    "InstallerConfig",
    "ManifestMatch",
    "MatchResult",
    "PackageSpec",
    "ReleaseMetadata",
]
