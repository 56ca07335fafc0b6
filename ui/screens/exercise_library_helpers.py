"""Helper functions for :mod:`exercise_library` screen."""

from __future__ import annotations

from functools import partial
from typing import Any

from backend.categories import FAVORITES, body_part_label

EMPTY_FAVORITES_TEXT = (
    "Nenhum exercício favoritado ainda.\nToque no coração para adicionar favoritos!"
)
EMPTY_RESULTS_TEXT = "Nenhum exercício encontrado"


def body_part_summary(body_parts, limit: int = 2) -> str:
    """Return up to ``limit`` translated body parts for a list row."""
    if not body_parts:
        return "Geral"
    return ", ".join(body_part_label(part) for part in body_parts[:limit])


def empty_text(category: str, has_results: bool) -> str:
    if has_results:
        return ""
    return EMPTY_FAVORITES_TEXT if category == FAVORITES else EMPTY_RESULTS_TEXT


def batch_button_text(count: int) -> str:
    return f"Adicionar ({count})"


def build_rows(screen: Any) -> list[dict]:
    """Return RecycleView data for the exercises the screen's query shows."""
    query = screen.query
    favorites = screen.favorites_store
    data = []
    for exercise in query.results:
        data.append(
            {
                "exercise_id": exercise.id,
                "text": exercise.name,
                "secondary_text": body_part_summary(exercise.body_parts),
                "image_ref": exercise.image_ref or "",
                "is_favorite": favorites.is_favorite(exercise.id),
                "is_selected": query.is_selected(exercise.id),
                "show_checkbox": bool(
                    query.allow_multi_select and query.on_exercise_select
                ),
                "tap_callback": partial(screen.on_exercise_tap, exercise),
                "favorite_callback": partial(
                    favorites.toggle_favorite, exercise.id
                ),
            }
        )
    return data


def populate_exercises(screen: Any) -> None:
    """Refresh the list widget, empty-state text and batch button."""
    query = screen.query
    if query is None:
        return
    rows = build_rows(screen)
    if screen.exercise_list is not None:
        screen.exercise_list.data = rows
    screen.empty_text = empty_text(query.category, bool(rows))
    screen.batch_text = batch_button_text(query.selection_count)
    screen.show_batch_button = bool(
        query.selection_count and query.allow_multi_select and query.on_exercise_select
    )
