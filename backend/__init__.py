"""Shared constants and globals for backend modules."""

from __future__ import annotations

import os
from pathlib import Path

# Directory holding user data (settings and persisted store documents).
# ``WORKOUT_DATA_DIR`` overrides it, mainly for tests and packaged builds.
DEFAULT_DATA_DIR = Path(
    os.environ.get("WORKOUT_DATA_DIR")
    or Path(__file__).resolve().parent.parent / "data"
)

# Exercise catalog shipped with the application
DEFAULT_CATALOG_PATH = (
    Path(__file__).resolve().parent.parent / "assets" / "exercises.json"
)

# Storage keys, one per persisted store
FAVORITES_STORAGE_KEY = "@gym_app_favorites"
HISTORY_STORAGE_KEY = "@exercise_history"

__all__ = [
    "DEFAULT_DATA_DIR",
    "DEFAULT_CATALOG_PATH",
    "FAVORITES_STORAGE_KEY",
    "HISTORY_STORAGE_KEY",
]
