"""
Release Install — host platform identifiers.
"""

from __future__ import annotations

import pytest

from ghr_installer.core.services.release_install.domain.platform import HostPlatform


class TestHostPlatform:
    """Tests for HostPlatform."""

    @pytest.mark.parametrize("system, machine, expected", [
        ("Linux", "x86_64", ("linux", "amd64")),
        ("Linux", "aarch64", ("linux", "arm64")),
        ("Darwin", "arm64", ("darwin", "arm64")),
        ("Windows", "AMD64", ("windows", "amd64")),
        ("Linux", "armv7l", ("linux", "arm")),
        ("Linux", "i686", ("linux", "386")),
        ("SunOS", "sun4v", ("sunos", "sun4v")),
    ])
    def test_from_uname(self, system: str, machine: str, expected: tuple[str, str]):
        host = HostPlatform.from_uname(system, machine)
        assert (host.os, host.arch) == expected

    def test_amd64_aliases(self):
        assert HostPlatform("linux", "amd64").arch_tokens() == ("amd64", "64bit", "x64")

    def test_no_aliases_elsewhere(self):
        assert HostPlatform("linux", "arm64").arch_tokens() == ("arm64",)

    def test_str(self):
        assert str(HostPlatform("darwin", "arm64")) == "darwin/arm64"

    def test_detect_returns_tokens(self):
        host = HostPlatform.detect()
        assert host.os and host.arch
        assert host.os == host.os.lower()
