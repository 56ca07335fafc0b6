"""Utility functions for loading and saving user settings.

The settings are stored as a list of dictionaries to preserve order.
Each dictionary contains ``key``, ``value`` and ``type`` entries.
"""

from __future__ import annotations

import json
import logging
from typing import Any, List, Dict

from . import DEFAULT_DATA_DIR

# Path to the JSON file where settings are persisted.
SETTINGS_PATH = DEFAULT_DATA_DIR / "settings.json"

# Default settings to initialize the file on first run.
DEFAULT_SETTINGS: List[Dict[str, Any]] = [
    {"key": "write_delay", "value": 0.0, "type": "float"},
    {"key": "search_debounce", "value": 0.2, "type": "float"},
    {"key": "default_category", "value": "all", "type": "str"},
    {"key": "view_mode", "value": "list", "type": "str"},
    {"key": "log_level", "value": "INFO", "type": "str"},
]

# Internal cache so settings are only read from disk once.
_settings_cache: List[Dict[str, Any]] | None = None


def _with_defaults(data: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Append any default entries missing from ``data``."""
    known = {item.get("key") for item in data}
    return data + [dict(item) for item in DEFAULT_SETTINGS if item["key"] not in known]


def load_settings() -> List[Dict[str, Any]]:
    """Load settings from :data:`SETTINGS_PATH` or create defaults."""
    if SETTINGS_PATH.exists():
        try:
            with SETTINGS_PATH.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
            if isinstance(data, list):
                return _with_defaults(data)
            logging.warning("Ignoring settings file %s: not a list", SETTINGS_PATH)
        except (OSError, ValueError):
            logging.exception("Could not read settings from %s", SETTINGS_PATH)
    defaults = [dict(item) for item in DEFAULT_SETTINGS]
    try:
        save_settings(defaults)
    except OSError:
        logging.exception("Could not write default settings to %s", SETTINGS_PATH)
    return defaults


def save_settings(settings: List[Dict[str, Any]]) -> None:
    """Persist ``settings`` to :data:`SETTINGS_PATH`."""
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    with SETTINGS_PATH.open("w", encoding="utf-8") as fh:
        json.dump(settings, fh)


def get_settings() -> List[Dict[str, Any]]:
    """Return the cached settings list, loading from disk if needed."""
    global _settings_cache
    if _settings_cache is None:
        _settings_cache = load_settings()
    return _settings_cache


def clear_cache() -> None:
    """Forget the cached settings so the next read hits the disk."""
    global _settings_cache
    _settings_cache = None


def get_value(key: str, default: Any = None) -> Any:
    """Fetch the value associated with ``key``."""
    for item in get_settings():
        if item.get("key") == key:
            return item.get("value")
    return default


def set_value(key: str, value: Any) -> None:
    """Update ``key`` with ``value`` and persist the change."""
    settings = get_settings()
    for item in settings:
        if item.get("key") == key:
            item["value"] = value
            break
    else:
        settings.append({"key": key, "value": value, "type": type(value).__name__})
    save_settings(settings)
