"""
Configuration loader — reads ghr-installer.yml into InstallerConfig.

The file is optional.  Without one every setting takes its default,
which is enough to install from public GitHub releases.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from ghr_installer.core.models.config import InstallerConfig

logger = logging.getLogger(__name__)

CONFIG_FILE = "ghr-installer.yml"


class ConfigError(Exception):
    """Raised when the installer configuration is unreadable or invalid."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for ghr-installer.yml from ``start_dir`` (default: cwd) upward."""
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def load_config(path: Path | None = None) -> InstallerConfig:
    """Load and validate the installer configuration.

    Args:
        path: Explicit config path. If None, searches upward from cwd and
            falls back to defaults when nothing is found.

    Raises:
        ConfigError: Explicit path missing, unreadable file, bad YAML,
            or a schema violation.
    """
    if path is None:
        path = find_config_file()
        if path is None:
            logger.debug("No %s found, using defaults", CONFIG_FILE)
            return InstallerConfig()
    elif not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading installer config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return InstallerConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # Keys may sit under an "installer" mapping or at the top level
    if "installer" in data:
        data = data["installer"] or {}
        if not isinstance(data, dict):
            raise ConfigError(f"'installer' in {path} must be a mapping")

    try:
        config = InstallerConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid installer configuration in {path}: {e}") from e

    logger.info("Loaded config %s (api_url=%s)", path, config.api_url)
    return config
