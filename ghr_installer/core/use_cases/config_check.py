"""
Config check use case — validate ghr-installer.yml and report the effective settings.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from ghr_installer.core.config.loader import ConfigError, find_config_file, load_config
from ghr_installer.core.models.config import InstallerConfig


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    config: InstallerConfig | None = None
    config_path: Path | None = None
    token_present: bool = False
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "settings": self.config.model_dump() if self.config else None,
            "token_present": self.token_present,
            "errors": self.errors,
            "warnings": self.warnings,
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate the installer configuration.

    A missing file is valid (defaults apply) but is reported as a warning.
    """
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_config_file()
        if config_path is None:
            result.warnings.append("No ghr-installer.yml found; using defaults.")
    result.config_path = config_path

    try:
        config = load_config(config_path)
    except ConfigError as e:
        result.errors.append(str(e))
        return result
    result.config = config

    if not config.api_url.startswith(("https://", "http://")):
        result.errors.append(f"api_url must be an http(s) URL, got {config.api_url!r}")
    elif config.api_url.startswith("http://"):
        result.warnings.append("api_url uses plain http; tokens would be sent unencrypted.")

    result.token_present = bool(os.environ.get(config.token_env))
    if not result.token_present:
        result.warnings.append(
            f"${config.token_env} is not set; requests are unauthenticated and rate limited."
        )

    result.valid = not result.errors
    return result
