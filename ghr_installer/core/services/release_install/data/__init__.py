"""
L0 Data — constants shared by every layer of the release installer.
"""

from ghr_installer.core.services.release_install.data.constants import (  # noqa: F401
    AMD64_ALIASES,
    ARCH_MAP,
    ARCHIVE_EXTENSIONS,
    CASELESS_MANIFEST_NAMES,
    CHUNK_SIZE,
    DELIMITERS,
    DIGEST_SIZES,
    DOWNLOADS_DIR,
    EXACT_MANIFEST_NAMES,
    HASH_ALGORITHMS,
    INSTALLS_DIR,
    METADATA_DIR,
    OS_MAP,
    RELEASE_METADATA_FILE,
)
