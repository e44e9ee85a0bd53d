"""Configuration loader for the compatibility checker.

Reads settings from a JSON file (default: settings.json in the repository
root) and validates the structure. All keys are optional:

- ``showForks`` (bool, default False): include forked repositories
- ``sweepFloor`` (int, default 5): lowest major probed by the openness sweep
- ``targetVersion`` (string or null): PHP version to check against when the
  caller does not pass one

This module performs its own lightweight validation at runtime rather than
invoking a full JSON Schema validator.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .models.version import Version
from .errors import MalformedVersionError
from .openness import DEFAULT_SWEEP_FLOOR

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "settings.json"
CONFIG_PATH_ENV_VAR = "PHP_COMPAT_CHECKER_CONFIG"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be loaded or is invalid."""


@dataclass(slots=True, frozen=True)
class Settings:
    """Top-level settings container."""

    show_forks: bool = False
    sweep_floor: int = DEFAULT_SWEEP_FLOOR
    target_version: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Create Settings from a dictionary, validating each field."""
        show_forks = data.get("showForks", False)
        if not isinstance(show_forks, bool):
            raise ConfigError("Invalid 'showForks' field (must be boolean)")

        sweep_floor = data.get("sweepFloor", DEFAULT_SWEEP_FLOOR)
        if isinstance(sweep_floor, bool) or not isinstance(sweep_floor, int) or sweep_floor < 0:
            raise ConfigError("Invalid 'sweepFloor' field (must be a non-negative integer)")

        target_version = data.get("targetVersion")
        if target_version is not None:
            if not isinstance(target_version, str):
                raise ConfigError("Invalid 'targetVersion' field (must be string or null)")
            try:
                Version.parse(target_version)
            except MalformedVersionError as exc:
                raise ConfigError(f"Invalid 'targetVersion' field: {exc}") from exc

        return cls(
            show_forks=show_forks,
            sweep_floor=sweep_floor,
            target_version=target_version,
        )


def _resolve_config_path(path: Path | str | None = None) -> tuple[Path, bool]:
    """Resolve the configuration file path.

    Priority:
    1. Explicit path argument
    2. PHP_COMPAT_CHECKER_CONFIG environment variable
    3. Default path (settings.json in repo root)

    The flag is True when the path was requested explicitly.
    """
    if path is not None:
        return Path(path), True

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path), True

    return DEFAULT_CONFIG_PATH, False


def load_settings(path: Path | str | None = None) -> Settings:
    """Load and validate settings from a JSON file.

    Args:
        path: Optional path to the config file. If not provided, uses the
            PHP_COMPAT_CHECKER_CONFIG env var or falls back to settings.json.

    Returns:
        A Settings object. Defaults are returned when no file was requested
        explicitly and the default file does not exist.

    Raises:
        ConfigError: If the file cannot be read or contains invalid data.
    """
    config_path, explicit = _resolve_config_path(path)

    if not config_path.exists():
        if explicit:
            raise ConfigError(f"Configuration file not found: {config_path}")
        logger.debug("No settings file at %s; using defaults", config_path)
        return Settings()

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in configuration file: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a JSON object")

    settings = Settings.from_dict(data)
    logger.debug("Loaded settings from %s: %s", config_path, settings)
    return settings
