"""
L1 Domain — Host platform identifiers (pure apart from ``detect``).

Release assets name their target with Go-style tokens
(``linux``/``darwin``/``windows``, ``amd64``/``arm64``/...).
"""

from __future__ import annotations

import platform as _platform
from dataclasses import dataclass

from ghr_installer.core.services.release_install.data.constants import (
    AMD64_ALIASES,
    ARCH_MAP,
    OS_MAP,
)


@dataclass(frozen=True)
class HostPlatform:
    os: str
    arch: str

    @classmethod
    def from_uname(cls, system: str, machine: str) -> HostPlatform:
        system_l = system.lower()
        os_name = OS_MAP.get(system_l, system_l)
        arch = ARCH_MAP.get(machine, ARCH_MAP.get(machine.lower(), machine.lower()))
        return cls(os=os_name, arch=arch)

    @classmethod
    def detect(cls) -> HostPlatform:
        """Identify the running host."""
        return cls.from_uname(_platform.system(), _platform.machine())

    def arch_tokens(self) -> tuple[str, ...]:
        """Architecture tokens accepted in asset names, in match order."""
        if self.arch == "amd64":
            return (self.arch, *AMD64_ALIASES)
        return (self.arch,)

    def __str__(self) -> str:
        return f"{self.os}/{self.arch}"
