"""
L1 Domain — Release asset matching (pure).

Picks the package archive for this host and its companion checksum
manifest out of a release's flat asset listing.

Package grammar, consumed left to right without backtracking::

    <project> <delim> (<version> | v<version>) <delim> <os> <delim> <arch> . <ext>

where ``<ext>`` (with its leading dot) must equal one entry of the
extension allow-list exactly.  The base name is everything before the
final ``.<ext>``.

Ties are resolved by listing order only: the first qualifying asset
wins.  No I/O, no subprocess.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from ghr_installer.core.errors import NoMatchingAssetError
from ghr_installer.core.models.release import (
    AssetDescriptor,
    ChecksumScope,
    ManifestMatch,
    MatchResult,
    PackageSpec,
)
from ghr_installer.core.services.release_install.data.constants import (
    ARCHIVE_EXTENSIONS,
    CASELESS_MANIFEST_NAMES,
    DELIMITERS,
    EXACT_MANIFEST_NAMES,
    HASH_ALGORITHMS,
)
from ghr_installer.core.services.release_install.domain.cursor import Cursor
from ghr_installer.core.services.release_install.domain.platform import HostPlatform

logger = logging.getLogger(__name__)


class AssetMatcher:
    """Filename grammar for one package spec on one host."""

    def __init__(
        self,
        spec: PackageSpec,
        host: HostPlatform,
        *,
        delimiters: Sequence[str] = DELIMITERS,
        extensions: Sequence[str] = ARCHIVE_EXTENSIONS,
        algorithms: Sequence[str] = HASH_ALGORITHMS,
        exact_manifest_names: dict[str, str | None] = EXACT_MANIFEST_NAMES,
        caseless_manifest_names: dict[str, str | None] = CASELESS_MANIFEST_NAMES,
    ) -> None:
        self.spec = spec
        self.host = host
        self._delimiters = tuple(delimiters)
        self._extensions = tuple(extensions)
        self._algorithms = tuple(algorithms)
        self._exact_manifest_names = dict(exact_manifest_names)
        self._caseless_manifest_names = {k.lower(): v for k, v in caseless_manifest_names.items()}

    # ── Package asset ───────────────────────────────────────────

    def _versioned_prefix(self, name: str) -> Cursor:
        """Consume ``<project><delim><version|vversion><delim>``."""
        versions = (self.spec.version, f"v{self.spec.version}")
        return (
            Cursor.over(name)
            .expect(self.spec.project)
            .expect_any(self._delimiters)
            .expect_any(versions)
            .expect_any(self._delimiters)
        )

    def match_package(self, name: str) -> str | None:
        """Return the base name if ``name`` is this host's package, else None."""
        cursor = (
            self._versioned_prefix(name)
            .expect(self.host.os)
            .expect_any(self._delimiters)
            .expect_any(self.host.arch_tokens())
            .expect(".")
        )
        if not cursor.valid:
            return None

        base_name = cursor.matched[:-1]
        extension = name[len(base_name):]
        if extension not in self._extensions:
            return None
        return base_name

    def select_package(self, assets: Iterable[AssetDescriptor]) -> MatchResult:
        """Return the first asset in listing order that matches this host.

        Raises:
            NoMatchingAssetError: No asset satisfies the grammar.
        """
        assets = list(assets)
        for asset in assets:
            base_name = self.match_package(asset.name)
            if base_name is not None:
                logger.debug("Package asset %s matched (base name %s)", asset.name, base_name)
                return MatchResult(asset=asset, base_name=base_name)

        raise NoMatchingAssetError(
            f"no asset of {self.spec} matches {self.host} "
            f"(assets: {', '.join(a.name for a in assets[:10]) or 'none'})"
        )

    # ── Checksum manifest ───────────────────────────────────────

    def _well_known_manifest(self, name: str) -> tuple[bool, str | None]:
        if name in self._exact_manifest_names:
            return True, self._exact_manifest_names[name]
        lowered = name.lower()
        if lowered in self._caseless_manifest_names:
            return True, self._caseless_manifest_names[lowered]
        return False, None

    def _project_manifest(self, name: str) -> bool:
        return self._versioned_prefix(name).expect("checksums.txt").expect_end().valid

    def _content_manifest(self, name: str, base_name: str) -> str | None:
        cursor = Cursor.over(name).expect(base_name).expect_any(self._delimiters)
        for algorithm in self._algorithms:
            if cursor.peek(algorithm):
                done = cursor.expect(algorithm).expect("sum.txt").expect_end()
                return algorithm if done.valid else None
        return None

    def classify_manifest(self, name: str, base_name: str) -> tuple[ChecksumScope, str | None] | None:
        """Return ``(scope, algorithm hint)`` if ``name`` is a checksum manifest.

        Rules, first match wins:

        1. Well-known literal names (``checksums.txt``, ``SHASUMS256.txt``,
           ``sha256sums.txt``, ...) describe release assets: global scope.
        2. ``<project><delim><version><delim>checksums.txt``: global scope.
        3. ``<base name><delim><algorithm>sum.txt``: content scope.
        """
        known, algorithm = self._well_known_manifest(name)
        if known:
            return ChecksumScope.GLOBAL, algorithm
        if self._project_manifest(name):
            return ChecksumScope.GLOBAL, None
        algorithm = self._content_manifest(name, base_name)
        if algorithm is not None:
            return ChecksumScope.CONTENT, algorithm
        return None

    def select_manifest(
        self, assets: Iterable[AssetDescriptor], base_name: str
    ) -> ManifestMatch | None:
        """Return the first checksum manifest in listing order, or None."""
        assets = list(assets)
        for asset in assets:
            classified = self.classify_manifest(asset.name, base_name)
            if classified is not None:
                scope, algorithm = classified
                logger.debug(
                    "Checksum manifest %s matched (scope=%s, algorithm=%s)",
                    asset.name, scope.value, algorithm or "auto",
                )
                return ManifestMatch(asset=asset, scope=scope, algorithm=algorithm)
        logger.debug("No checksum manifest among %d assets", len(assets))
        return None
