"""
Config check use case — validate decorate.yml and the paths it names.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from nxdecorate.core.config.loader import ConfigError, find_config_file, load_config
from nxdecorate.core.models.config import DecorateConfig


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    config: DecorateConfig | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "config": self.config.model_dump() if self.config else None,
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate the decorate configuration and report issues.

    A missing decorate.yml is not an error: defaults apply.
    """
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_config_file()
    result.config_path = config_path

    try:
        config = load_config(config_path)
    except ConfigError as e:
        result.errors.append(str(e))
        return result
    result.config = config

    root = config_path.parent if config_path else Path.cwd()

    if config_path is None:
        result.warnings.append("No decorate.yml found, using defaults.")

    if Path(config.link_target).is_absolute():
        result.warnings.append(
            f"link_target '{config.link_target}' is absolute; "
            "the link will break if the project moves."
        )

    if config.effective_hook_marker not in config.hook_command:
        result.errors.append(
            f"hook_marker '{config.hook_marker}' does not occur in hook_command "
            f"'{config.hook_command}'; the hook would be appended on every run."
        )

    if not (root / config.manifest_path).is_file():
        result.warnings.append(f"Manifest not found: {config.manifest_path}")

    if not (root / config.bootstrap_path).is_file():
        result.warnings.append(f"Bootstrap file not found: {config.bootstrap_path}")

    link_dir = Path(config.link_path).parent
    if not (root / link_dir).is_dir():
        result.warnings.append(f"Link directory not found: {link_dir}")

    result.valid = len(result.errors) == 0
    return result
