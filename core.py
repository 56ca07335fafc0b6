"""Construction and lifecycle of the application stores.

Stores are plain objects built here and handed to the app, which passes
them on to the screens.  Nothing looks them up globally.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from backend import DEFAULT_CATALOG_PATH, DEFAULT_DATA_DIR, settings
from backend.catalog import Catalog, load_catalog
from backend.catalog_query import CatalogQuery
from backend.favorites import FavoritesStore
from backend.history import ExerciseHistoryStore
from backend.storage import DocumentStorage


def configure_logging(level: str | None = None) -> None:
    """Apply ``level`` (default: the ``log_level`` setting) to the root logger."""

    name = str(level or settings.get_value("log_level", "INFO")).upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        logging.warning("Unknown log level %r, using INFO", name)
        numeric = logging.INFO
    logging.getLogger().setLevel(numeric)


@dataclass
class AppStores:
    """The catalog plus the persisted stores of one running app."""

    catalog: Catalog
    favorites: FavoritesStore
    history: ExerciseHistoryStore

    def hydrate(self) -> None:
        """Load both stores from storage; each one fails independently."""
        self.favorites.hydrate()
        self.history.hydrate()

    def flush(self) -> None:
        """Write every pending change to storage now."""
        self.favorites.flush()
        self.history.flush()

    @property
    def pending_writes(self) -> int:
        return self.favorites.pending_writes + self.history.pending_writes

    def new_query(self, **kwargs) -> CatalogQuery:
        """Return a fresh catalog view bound to the favorites store."""
        return CatalogQuery(self.catalog, self.favorites, **kwargs)

    def complete_set(self, exercise_id, weight: str, reps: str) -> bool:
        """Record a finished workout set; ``True`` if it set a new PR."""
        return self.history.record_set(exercise_id, weight, reps)


def create_stores(
    data_dir: Path | str | None = None,
    *,
    catalog: Catalog | None = None,
    catalog_path: Path | str = DEFAULT_CATALOG_PATH,
    write_delay: float | None = None,
) -> AppStores:
    """Build the stores without touching storage.

    ``catalog`` may be passed in directly (tests, previews); otherwise it is
    loaded from ``catalog_path``.
    """

    storage = DocumentStorage(data_dir or DEFAULT_DATA_DIR)
    if write_delay is None:
        write_delay = float(settings.get_value("write_delay", 0.0) or 0.0)
    if catalog is None:
        catalog = load_catalog(catalog_path)
    return AppStores(
        catalog=catalog,
        favorites=FavoritesStore(storage, write_delay=write_delay),
        history=ExerciseHistoryStore(storage, write_delay=write_delay),
    )


def init_stores(data_dir: Path | str | None = None, **kwargs) -> AppStores:
    """Build the stores and hydrate them from storage."""

    stores = create_stores(data_dir, **kwargs)
    stores.hydrate()
    logging.info(
        "Loaded %d exercises, %d favorites, %d personal records",
        len(stores.catalog),
        len(stores.favorites.favorites),
        len(stores.history.history),
    )
    return stores
