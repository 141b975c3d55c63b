"""
L5 Orchestration — ``__init__.py`` re-exports the pipeline entry points.
"""

from ghr_installer.core.services.release_install.orchestration.orchestrator import (  # noqa: F401
    InstallResult,
    ResolveResult,
    install_package,
    resolve_package,
)
