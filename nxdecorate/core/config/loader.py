"""
Configuration loader — reads decorate.yml into a DecorateConfig.

The file is optional. When it is missing the defaults apply and the
current working directory is the project root, which is where the
package manager runs lifecycle hooks.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from nxdecorate.core.models.config import DecorateConfig

logger = logging.getLogger(__name__)

# Default config filename
DECORATE_CONFIG_FILE = "decorate.yml"


class ConfigError(Exception):
    """Raised when decorate.yml is unreadable or invalid."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for decorate.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to decorate.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / DECORATE_CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path | None = None) -> DecorateConfig:
    """Load and validate decorate.yml.

    Args:
        path: Explicit path to decorate.yml. If None, defaults are returned.

    Returns:
        Validated DecorateConfig.

    Raises:
        ConfigError: If an explicit file is missing or invalid.
    """
    if path is None:
        logger.debug("No %s — using defaults", DECORATE_CONFIG_FILE)
        return DecorateConfig()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading decorate config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    # An empty file is a valid "all defaults" config
    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The YAML may wrap everything under a "decorate" key or be flat
    section = data.get("decorate", data)
    if not isinstance(section, dict):
        raise ConfigError(f"Expected 'decorate' to be a mapping in {path}")

    try:
        config = DecorateConfig.model_validate(section)
    except ValidationError as e:
        raise ConfigError(f"Invalid decorate configuration: {e}") from e

    logger.info("Loaded decorate config from %s", path)
    return config


def resolve_config(config_path: Path | None = None) -> tuple[DecorateConfig, Path]:
    """Locate and load the config, returning it with the project root.

    An explicit path must exist. Without one, decorate.yml is searched
    upward from the cwd; the project root is the directory holding it,
    or the cwd when none is found.
    """
    if config_path is None:
        config_path = find_config_file()

    if config_path is None:
        return load_config(None), Path.cwd().resolve()

    return load_config(config_path), config_path.parent.resolve()
