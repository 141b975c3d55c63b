"""
Tests for domain models — release types and installer config.
"""

import pytest
from pydantic import ValidationError

from ghr_installer.core.models import (
    AssetDescriptor,
    ChecksumScope,
    InstallerConfig,
    PackageSpec,
    ReleaseMetadata,
)


class TestPackageSpec:
    """Tests for the PackageSpec model."""

    def test_tag_and_str(self):
        spec = PackageSpec(owner="acme", project="myproj", version="1.2.3")
        assert spec.tag == "v1.2.3"
        assert str(spec) == "acme/myproj@1.2.3"

    def test_frozen(self):
        spec = PackageSpec(owner="acme", project="myproj", version="1.2.3")
        with pytest.raises(ValidationError):
            spec.version = "2.0.0"


class TestReleaseMetadata:
    """Tests for ReleaseMetadata and AssetDescriptor."""

    def test_json_round_trip_keeps_order(self):
        release = ReleaseMetadata(
            tag_name="v1.0.0",
            assets=(
                AssetDescriptor(name="b.zip", download_url="https://x/b.zip"),
                AssetDescriptor(name="a.zip", download_url="https://x/a.zip"),
            ),
        )
        loaded = ReleaseMetadata.model_validate_json(release.model_dump_json())
        assert loaded == release
        assert loaded.asset_names() == ["b.zip", "a.zip"]

    def test_defaults(self):
        assert ReleaseMetadata().assets == ()


class TestChecksumScope:
    """Tests for ChecksumScope."""

    def test_values(self):
        assert ChecksumScope.GLOBAL.value == "global"
        assert ChecksumScope("content") is ChecksumScope.CONTENT


class TestInstallerConfig:
    """Tests for InstallerConfig defaults and validation."""

    def test_defaults(self):
        config = InstallerConfig()
        assert config.api_url == "https://api.github.com"
        assert config.host == "github.com"
        assert config.token_env == "GITHUB_TOKEN"
        assert config.timeout is None

    def test_rejects_unknown_keys(self):
        with pytest.raises(ValidationError):
            InstallerConfig.model_validate({"api": "x"})
