"""Helpers for merging and loading configuration documents."""

from __future__ import annotations

import json
from copy import deepcopy
from pathlib import Path
from typing import Any


class ConfigValidationError(ValueError):
    """Raised when a configuration file cannot be used."""


def deep_merge(base: dict[str, Any], updates: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge updates into base without mutating inputs.

    - Keys present in updates with non-None values are merged/overwritten
    - Keys present in updates with None values are skipped (preserve base value)
    - Keys not present in updates are preserved from base
    """
    result = deepcopy(base)
    for key, value in updates.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        elif key in result and value is None:
            continue
        else:
            result[key] = value
    return result


def load_config_file(path: str | Path) -> dict[str, Any]:
    """Read a JSON config file into a dict.

    Raises:
        ConfigValidationError: when the file is missing, unreadable or not a JSON object
    """
    config_path = Path(path).expanduser()
    try:
        raw = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigValidationError(f"Cannot read config file {config_path}: {e}") from e
    try:
        data = json.loads(raw) if raw.strip() else {}
    except json.JSONDecodeError as e:
        raise ConfigValidationError(f"Invalid JSON in {config_path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigValidationError(f"Config root must be an object: {config_path}")
    return data
