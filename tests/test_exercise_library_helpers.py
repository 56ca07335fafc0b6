from types import SimpleNamespace

import pytest

from backend.catalog_query import CatalogQuery
from ui.screens.exercise_library_helpers import (
    EMPTY_FAVORITES_TEXT,
    EMPTY_RESULTS_TEXT,
    batch_button_text,
    body_part_summary,
    build_rows,
    empty_text,
    populate_exercises,
)


@pytest.fixture
def screen(catalog, favorites):
    taps = []
    ns = SimpleNamespace(
        favorites_store=favorites,
        exercise_list=SimpleNamespace(data=[]),
        empty_text="",
        batch_text="",
        show_batch_button=False,
        taps=taps,
        on_exercise_tap=taps.append,
    )
    ns.query = CatalogQuery(
        catalog,
        favorites,
        on_exercise_select=lambda ex: None,
        allow_multi_select=True,
    )
    return ns


def test_body_part_summary():
    assert body_part_summary(("chest",)) == "Peito"
    assert body_part_summary(("upper back", "biceps", "forearms")) == "Costas Superiores, Bíceps"
    assert body_part_summary(()) == "Geral"


def test_empty_text():
    assert empty_text("favorites", False) == EMPTY_FAVORITES_TEXT
    assert empty_text("chest", False) == EMPTY_RESULTS_TEXT
    assert empty_text("chest", True) == ""


def test_batch_button_text():
    assert batch_button_text(3) == "Adicionar (3)"


def test_rows_reflect_favorites_and_selection(screen, favorites):
    favorites.toggle_favorite("2")
    screen.query.toggle_selection("3")
    rows = {row["exercise_id"]: row for row in build_rows(screen)}
    assert rows["2"]["is_favorite"] and not rows["1"]["is_favorite"]
    assert rows["3"]["is_selected"] and not rows["2"]["is_selected"]
    assert rows["1"]["text"] == "Bench Press"
    assert rows["1"]["show_checkbox"]


def test_row_callbacks(screen, favorites, catalog):
    row = build_rows(screen)[0]
    row["favorite_callback"]()
    assert favorites.is_favorite("1")
    row["tap_callback"]()
    assert screen.taps == [catalog.get("1")]


def test_populate_exercises(screen):
    screen.query.category = "favorites"
    populate_exercises(screen)
    assert screen.exercise_list.data == []
    assert screen.empty_text == EMPTY_FAVORITES_TEXT
    assert not screen.show_batch_button

    screen.query.category = "all"
    screen.query.toggle_selection("1")
    screen.query.toggle_selection("4")
    populate_exercises(screen)
    assert len(screen.exercise_list.data) == 6
    assert screen.empty_text == ""
    assert screen.batch_text == "Adicionar (2)"
    assert screen.show_batch_button
