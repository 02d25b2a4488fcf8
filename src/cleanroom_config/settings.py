"""Tool settings loaded from layered YAML files."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigValidationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIGURATION_FILE = "cleanroom/config.json"

_SETTING_TYPES: dict[str, type] = {
    "configuration_file": str,
    "enable_warnings": bool,
}


@dataclass(frozen=True)
class Settings:
    """Where the configuration document lives and how the queue reports failures.

    Attributes:
        project_root: Absolute path every relative path is resolved against
        configuration_file: Path of the JSON document, relative to project_root
        enable_warnings: Log diagnostic context when a queued task fails
    """

    project_root: Path
    configuration_file: str = DEFAULT_CONFIGURATION_FILE
    enable_warnings: bool = True


def load_settings(project_root: Path, files: Iterable[Path | None] = ()) -> Settings:
    """Load settings from YAML files, later files overriding earlier ones.

    Typical order is user settings, then project settings, then local
    (machine-specific) settings. Missing files and None entries are skipped.

    Args:
        project_root: Absolute project root
        files: Settings files, lowest priority first

    Returns:
        Settings with every override applied

    Raises:
        ConfigValidationError: On unknown keys or wrongly typed values
    """
    merged: dict[str, Any] = {}
    for path in files:
        if path is None:
            continue
        data = _read_yaml(path)
        if data is None:
            continue
        if not isinstance(data, dict):
            raise ConfigValidationError(f"Settings in {path} must be a mapping")
        _check_settings(path, data)
        merged.update(data)

    return Settings(project_root=project_root, **merged)


def _check_settings(path: Path, data: dict[str, Any]) -> None:
    for key, value in data.items():
        expected = _SETTING_TYPES.get(key)
        if expected is None:
            raise ConfigValidationError(f"Unknown setting '{key}' in {path}")
        if not isinstance(value, expected):
            raise ConfigValidationError(f"Setting '{key}' in {path} must be of type {expected.__name__}")


def _read_yaml(path: Path) -> Any:
    """Read YAML file.

    Args:
        path: Path to YAML file

    Returns:
        Parsed data, {} for an empty file, or None if the file doesn't exist
        or cannot be read
    """
    if not path.exists():
        return None

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
            return data if data is not None else {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Failed to read settings from {path}: {e}")
        return None
