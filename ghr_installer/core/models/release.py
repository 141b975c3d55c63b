"""
Release models — the identity of a package and what its release offers.

A ``PackageSpec`` names exactly one tagged release.  Its
``ReleaseMetadata`` is the ordered asset listing returned by the
remote API, cached to disk the first time it is fetched and never
refreshed afterwards (tagged releases are treated as immutable).
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class PackageSpec(BaseModel):
    """Validated ``owner/project@version`` triple."""

    model_config = ConfigDict(frozen=True)

    owner: str
    project: str
    version: str

    @property
    def tag(self) -> str:
        """Release tag literal for this version."""
        return f"v{self.version}"

    def __str__(self) -> str:
        return f"{self.owner}/{self.project}@{self.version}"


class AssetDescriptor(BaseModel):
    """One downloadable file attached to a release."""

    model_config = ConfigDict(frozen=True)

    name: str
    download_url: str


class ReleaseMetadata(BaseModel):
    """Asset listing of one tagged release, in API response order."""

    model_config = ConfigDict(frozen=True)

    tag_name: str = ""
    name: str = ""
    assets: tuple[AssetDescriptor, ...] = Field(default_factory=tuple)

    def asset_names(self) -> list[str]:
        return [a.name for a in self.assets]


class ChecksumScope(str, Enum):
    """What a checksum manifest describes."""

    GLOBAL = "global"    # the downloaded archive itself
    CONTENT = "content"  # files produced by extraction


class MatchResult(BaseModel):
    """The package asset selected for this host."""

    model_config = ConfigDict(frozen=True)

    asset: AssetDescriptor
    base_name: str


class ManifestMatch(BaseModel):
    """A checksum manifest asset and how to interpret it."""

    model_config = ConfigDict(frozen=True)

    asset: AssetDescriptor
    scope: ChecksumScope
    algorithm: str | None = None
