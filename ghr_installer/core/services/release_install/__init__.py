"""
Release installer service — package re-exports.

    from ghr_installer.core.services.release_install import install_package

Layers, innermost first:

- L0 ``data``           constants (delimiters, extensions, algorithms)
- L1 ``domain``         pure parsing and filename matching
- L4 ``execution``      caches, downloads, checksums, extraction
- L5 ``orchestration``  the install pipeline
"""

# ── L1: Domain ──
from ghr_installer.core.services.release_install.domain.package_spec import (  # noqa: F401
    parse_package_spec,
)
from ghr_installer.core.services.release_install.domain.platform import (  # noqa: F401
    HostPlatform,
)

# ── Context ──
from ghr_installer.core.services.release_install.context import InstallContext  # noqa: F401

# ── L5: Orchestration ──
from ghr_installer.core.services.release_install.orchestration.orchestrator import (  # noqa: F401
    InstallResult,
    ResolveResult,
    install_package,
    resolve_package,
)
