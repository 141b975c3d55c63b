"""
L1 Domain — pure logic, no I/O.

Package spec parsing, filename grammar matching and checksum
manifest parsing.
"""

from ghr_installer.core.services.release_install.domain.asset_matching import (  # noqa: F401
    AssetMatcher,
)
from ghr_installer.core.services.release_install.domain.checksums import (  # noqa: F401
    ChecksumEntry,
    ChecksumManifest,
    detect_algorithm,
    parse_manifest,
)
from ghr_installer.core.services.release_install.domain.cursor import Cursor  # noqa: F401
from ghr_installer.core.services.release_install.domain.package_spec import (  # noqa: F401
    is_semver,
    parse_package_spec,
)
from ghr_installer.core.services.release_install.domain.platform import (  # noqa: F401
    HostPlatform,
)
