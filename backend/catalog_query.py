"""Filtered views of the exercise catalog.

:func:`filter_exercises` is the pure computation.  :class:`CatalogQuery`
holds the transient state of one library view (category, search text and
the batch selection) and recomputes :attr:`CatalogQuery.results` whenever
one of its inputs or the favorites change.

The batch selection is kept when the category or search changes.  Only the
selected exercises that are visible at commit time are handed out, but the
hidden ones stay selected and show up again once the filter brings them
back.
"""

from __future__ import annotations

from typing import Callable, Iterable

from kivy.event import EventDispatcher
from kivy.properties import (
    AliasProperty,
    BooleanProperty,
    ObjectProperty,
    StringProperty,
)

from .catalog import ExerciseRecord
from .categories import ALL, FAVORITES, targets_for


def effective_search(search_text: str, external_search: str = "") -> str:
    """Return the search string in force; an external search wins."""
    return external_search or search_text


def filter_exercises(
    catalog: Iterable[ExerciseRecord],
    category: str = ALL,
    search: str = "",
    favorites: Iterable[str] = (),
) -> list[ExerciseRecord]:
    """Return the exercises of ``catalog`` matching ``category`` and ``search``.

    The category filter runs first, then a case-insensitive substring match
    on the exercise name.  Catalog order is preserved.
    """

    exercises = list(catalog)
    if category == FAVORITES:
        favorite_ids = {str(f) for f in favorites}
        exercises = [ex for ex in exercises if ex.id in favorite_ids]
    elif category != ALL:
        targets = targets_for(category)
        exercises = [
            ex
            for ex in exercises
            if any(t in part.lower() for part in ex.body_parts for t in targets)
        ]

    if search.strip():
        query = search.lower()
        exercises = [ex for ex in exercises if query in ex.name.lower()]
    return exercises


class CatalogQuery(EventDispatcher):
    """Reactive catalog view for one library screen.

    ``favorites_store`` is any object exposing a ``favorites`` Kivy property
    (normally :class:`backend.favorites.FavoritesStore`).  The callbacks are
    supplied by whoever embeds the view, e.g. the workout exercise picker.
    """

    category = StringProperty(ALL)
    search_text = StringProperty("")
    # Search text supplied by an embedding screen; wins over ``search_text``
    external_search = StringProperty("")
    allow_multi_select = BooleanProperty(False)
    results = ObjectProperty((), rebind=False)
    selected_ids = ObjectProperty(frozenset(), rebind=False)

    def _get_selection_count(self):
        return len(self.selected_ids)

    selection_count = AliasProperty(
        _get_selection_count, None, bind=["selected_ids"], cache=True
    )

    def __init__(
        self,
        catalog: Iterable[ExerciseRecord],
        favorites_store=None,
        *,
        on_exercise_select: Callable[[ExerciseRecord], None] | None = None,
        on_batch_select: Callable[[list[ExerciseRecord]], None] | None = None,
        on_category_change: Callable[[str], None] | None = None,
        **kwargs,
    ) -> None:
        self.catalog = catalog
        self.favorites_store = favorites_store
        self.on_exercise_select = on_exercise_select
        self.on_batch_select = on_batch_select
        self.on_category_change = on_category_change
        super().__init__(**kwargs)
        for name in ("category", "search_text", "external_search"):
            self.fbind(name, self.refresh)
        if favorites_store is not None:
            # bound methods are held weakly, so a discarded view is never called
            favorites_store.bind(favorites=self.refresh)
        self.refresh()

    @property
    def favorites(self) -> tuple:
        if self.favorites_store is None:
            return ()
        return self.favorites_store.favorites

    def refresh(self, *args) -> None:
        """Recompute :attr:`results` from the current inputs."""
        self.results = tuple(
            filter_exercises(
                self.catalog,
                self.category,
                effective_search(self.search_text, self.external_search),
                self.favorites,
            )
        )

    def set_category(self, category: str) -> None:
        self.category = category
        if self.on_category_change:
            self.on_category_change(category)

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    def is_selected(self, exercise_id) -> bool:
        return str(exercise_id) in self.selected_ids

    def toggle_selection(self, exercise_id) -> None:
        exercise_id = str(exercise_id)
        if exercise_id in self.selected_ids:
            self.selected_ids = self.selected_ids - {exercise_id}
        else:
            self.selected_ids = self.selected_ids | {exercise_id}

    def clear_selection(self) -> None:
        self.selected_ids = frozenset()

    def selected_exercises(self) -> list[ExerciseRecord]:
        """Return the visible exercises that are selected, in view order."""
        return [ex for ex in self.results if ex.id in self.selected_ids]

    def select(self, exercise: ExerciseRecord) -> bool:
        """Handle a tap on ``exercise``.

        In multi-select mode the tap toggles the selection; otherwise the
        exercise goes straight to ``on_exercise_select``.  Returns ``False``
        when nobody consumes the tap, leaving navigation to the caller.
        """

        if self.on_exercise_select is None:
            return False
        if self.allow_multi_select:
            self.toggle_selection(exercise.id)
        else:
            self.on_exercise_select(exercise)
        return True

    def commit_batch(self) -> list[ExerciseRecord]:
        """Hand the selected visible exercises out and clear the selection.

        ``on_batch_select`` receives the whole list; without it every
        exercise is passed to ``on_exercise_select`` in turn.
        """

        chosen = self.selected_exercises()
        if self.on_batch_select:
            self.on_batch_select(chosen)
        elif self.on_exercise_select:
            for exercise in chosen:
                self.on_exercise_select(exercise)
        self.clear_selection()
        return chosen
