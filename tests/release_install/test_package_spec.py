"""
Release Install — package spec parsing.
"""

from __future__ import annotations

import pytest

from ghr_installer.core.errors import InvalidSpecError, InvalidVersionError
from ghr_installer.core.services.release_install.domain.package_spec import (
    is_semver,
    parse_package_spec,
)


class TestParsePackageSpec:
    """owner/project@version → PackageSpec."""

    def test_basic(self):
        spec = parse_package_spec("acme/myproj@1.2.3")
        assert spec.owner == "acme"
        assert spec.project == "myproj"
        assert spec.version == "1.2.3"
        assert spec.tag == "v1.2.3"

    def test_splits_at_last_at_sign(self):
        spec = parse_package_spec("acme/myproj@1.0.0-rc.1+build.5")
        assert spec.version == "1.0.0-rc.1+build.5"

    @pytest.mark.parametrize("text", [
        "acme/myproj@1.2.3",
        "some-org/tool_x@0.0.1",
        "a/b@10.20.30-alpha.1",
        "cli/cli@2.40.1+meta",
    ])
    def test_round_trip(self, text: str):
        assert str(parse_package_spec(text)) == text

    def test_is_immutable(self):
        spec = parse_package_spec("acme/myproj@1.2.3")
        with pytest.raises(Exception):
            spec.owner = "other"

    def test_missing_at(self):
        with pytest.raises(InvalidSpecError):
            parse_package_spec("acme/myproj")

    @pytest.mark.parametrize("version", ["v1.2.3", "1.2", "1.2.3.4", "01.2.3", "latest", ""])
    def test_invalid_version(self, version: str):
        with pytest.raises(InvalidVersionError):
            parse_package_spec(f"acme/myproj@{version}")

    def test_invalid_version_is_a_spec_error(self):
        with pytest.raises(InvalidSpecError):
            parse_package_spec("acme/myproj@nope")

    @pytest.mark.parametrize("prefix", [
        "myproj",
        "acme/",
        "/myproj",
        "acme/myproj/extra",
        "",
        "acme/a@b",
        "../myproj",
        "acme/ myproj",
    ])
    def test_invalid_owner_project(self, prefix: str):
        with pytest.raises(InvalidSpecError) as exc_info:
            parse_package_spec(f"{prefix}@1.2.3")
        assert not isinstance(exc_info.value, InvalidVersionError)


class TestIsSemver:
    """Tests for is_semver()."""

    @pytest.mark.parametrize("version", ["0.0.0", "1.2.3-0.3.7", "1.0.0-x.7.z.92", "1.0.0+20130313144700"])
    def test_valid(self, version: str):
        assert is_semver(version)

    @pytest.mark.parametrize("version", ["1.0.0-01", "1.0.0-", "1.0.0+", " 1.0.0", "1.0.0\n"])
    def test_invalid(self, version: str):
        assert not is_semver(version)
