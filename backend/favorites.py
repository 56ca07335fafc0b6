"""Favorite exercises, persisted across restarts."""

from __future__ import annotations

import logging

from kivy.event import EventDispatcher
from kivy.properties import AliasProperty, BooleanProperty, NumericProperty

from . import FAVORITES_STORAGE_KEY
from .errors import StorageError
from .storage import DocumentStorage
from .write_behind import WriteBehind


class FavoritesStore(EventDispatcher):
    """Set of exercise ids the user marked as favorite.

    Consumers read :attr:`favorites` (an immutable tuple in the order the ids
    were added) and subscribe with ``store.bind(favorites=callback)``.  All
    changes go through the methods below; each one updates memory right away
    and schedules a write of the whole set.
    """

    # Incremented on every committed change
    revision = NumericProperty(0)
    # True once :meth:`hydrate` has run
    loaded = BooleanProperty(False)

    __events__ = ("on_persisted",)

    def _get_favorites(self):
        return tuple(getattr(self, "_ids", ()))

    favorites = AliasProperty(_get_favorites, None, bind=["revision"], cache=True)

    def __init__(
        self,
        storage: DocumentStorage,
        key: str = FAVORITES_STORAGE_KEY,
        write_delay: float = 0.0,
        **kwargs,
    ) -> None:
        # dict keeps insertion order and gives O(1) membership
        self._ids: dict[str, None] = {}
        super().__init__(**kwargs)
        self.storage = storage
        self.key = key
        self._writer = WriteBehind(
            storage, key, delay=write_delay, on_complete=self._on_write_complete
        )

    def hydrate(self) -> None:
        """Load the stored favorites once; failures leave the set as is."""

        if self.loaded:
            return
        try:
            stored = self.storage.read(self.key)
        except StorageError:
            logging.exception("Error loading favorites")
            stored = None
        if stored is not None:
            if isinstance(stored, list):
                # the stored set replaces anything changed before loading
                self._writer.cancel()
                self._ids = dict.fromkeys(
                    str(item) for item in stored if isinstance(item, (str, int))
                )
                self.revision += 1
            else:
                logging.warning(
                    "Ignoring stored favorites: expected a list, got %s",
                    type(stored).__name__,
                )
        self.loaded = True

    def is_favorite(self, exercise_id) -> bool:
        return str(exercise_id) in self._ids

    def toggle_favorite(self, exercise_id) -> None:
        if self.is_favorite(exercise_id):
            self.remove_favorite(exercise_id)
        else:
            self.add_favorite(exercise_id)

    def add_favorite(self, exercise_id) -> None:
        exercise_id = str(exercise_id)
        if exercise_id in self._ids:
            return
        self._ids[exercise_id] = None
        self._commit()

    def remove_favorite(self, exercise_id) -> None:
        exercise_id = str(exercise_id)
        if exercise_id not in self._ids:
            return
        del self._ids[exercise_id]
        self._commit()

    @property
    def pending_writes(self) -> int:
        return self._writer.pending

    def flush(self) -> None:
        """Write any pending changes to storage immediately."""
        self._writer.flush()

    def _commit(self) -> None:
        self.revision += 1
        self._writer.schedule(list(self._ids))

    def _on_write_complete(self, key: str, ok: bool) -> None:
        self.dispatch("on_persisted", ok)

    def on_persisted(self, ok: bool) -> None:
        pass
