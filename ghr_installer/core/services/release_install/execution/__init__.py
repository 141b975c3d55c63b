"""
L4 Execution — ``__init__.py`` re-exports all execution functions.

These functions WRITE to the system: cache files, downloaded assets,
extracted install trees.
"""

from ghr_installer.core.services.release_install.execution.atomic import (  # noqa: F401
    atomic_writer,
)
from ghr_installer.core.services.release_install.execution.checksum_verify import (  # noqa: F401
    ChecksumEngine,
    load_manifest,
)
from ghr_installer.core.services.release_install.execution.download import (  # noqa: F401
    asset_path,
    download_asset,
)
from ghr_installer.core.services.release_install.execution.extract import (  # noqa: F401
    Extractable,
    RequiresUnwrap,
    extract_archive,
    resolve_archive,
    resolve_format,
)
from ghr_installer.core.services.release_install.execution.release_cache import (  # noqa: F401
    load_release_metadata,
    release_metadata_path,
    resolve_release_metadata,
    save_release_metadata,
)
