"""YAML configuration for goup.

The configuration file is optional. When present (``<root>/config.yaml`` or the
path given with --config) it can point goup at a mirror of the Go download
site:

    catalog_url: https://go.dev/dl/?mode=json
    download_url: https://go.dev/dl/
    timeout: 30
"""

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml

from goup.core.directory import GoupPaths
from goup.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_URL = "https://go.dev/dl/?mode=json"
DEFAULT_DOWNLOAD_URL = "https://go.dev/dl/"


@dataclass
class GoupConfig:
    """Complete goup configuration."""

    catalog_url: str = DEFAULT_CATALOG_URL
    download_url: str = DEFAULT_DOWNLOAD_URL
    timeout: float = 30  # catalog request only; archive downloads never time out


def load_config(config_path: Path, required: bool = False) -> GoupConfig:
    """
    Load goup configuration from a YAML file.

    Args:
        config_path: Path to the configuration file
        required: If True, a missing file is an error

    Returns:
        Parsed configuration (defaults when the file is absent or empty)

    Raises:
        ConfigError: If the file is required but missing, is not valid YAML,
            or contains values of the wrong type
    """
    if not config_path.exists():
        if required:
            raise ConfigError(f"Configuration file not found: {config_path}")
        logger.debug(f"Config file not found (optional): {config_path}")
        return GoupConfig()

    logger.debug(f"Loading configuration from {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Unable to read {config_path}: {e}") from e

    if data is None:
        return GoupConfig()

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration in {config_path} must be a mapping")

    return _parse_and_validate(data)


def _parse_and_validate(data: dict) -> GoupConfig:
    """Parse and validate configuration data."""
    known = {f.name for f in fields(GoupConfig)}
    for key in data:
        if key not in known:
            logger.debug(f"Ignoring unknown configuration key: {key}")

    config = GoupConfig()

    for key in ("catalog_url", "download_url"):
        if key in data:
            value = data[key]
            if not isinstance(value, str) or not value:
                raise ConfigError(f"'{key}' must be a non-empty string")
            setattr(config, key, value)

    if "timeout" in data:
        timeout = data["timeout"]
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
            raise ConfigError("'timeout' must be a number of seconds")
        if timeout <= 0:
            raise ConfigError("'timeout' must be positive")
        config.timeout = timeout

    return config


def resolve_config_path(root: Path, explicit: Optional[Path] = None) -> Path:
    """Return the config file to read: the explicit path or <root>/config.yaml."""
    if explicit is not None:
        return Path(explicit)
    return GoupPaths(root).config_file
