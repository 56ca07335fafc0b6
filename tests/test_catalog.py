import json

import pytest

from backend import DEFAULT_CATALOG_PATH
from backend.catalog import Catalog, ExerciseRecord, load_catalog
from backend.categories import (
    BODY_PART_MAPPING,
    CATEGORIES,
    body_part_label,
    category_label,
    targets_for,
)
from backend.errors import CatalogError


def test_load_catalog(tmp_path):
    path = tmp_path / "exercises.json"
    path.write_text(
        json.dumps(
            [
                {"id": 1, "name": "Bench Press", "body_parts": ["chest"], "image_url": "a.png"},
                {"id": "2", "name": "Plank", "body_parts": "waist"},
            ]
        ),
        encoding="utf-8",
    )
    catalog = load_catalog(path)
    assert len(catalog) == 2
    assert catalog.get(1) == ExerciseRecord("1", "Bench Press", ("chest",), "a.png")
    assert catalog.get("2").body_parts == ("waist",)
    assert catalog.get("2").image_ref is None
    assert 1 in catalog and "3" not in catalog


def test_load_missing_catalog(tmp_path):
    with pytest.raises(CatalogError):
        load_catalog(tmp_path / "missing.json")


def test_load_corrupt_catalog(tmp_path):
    path = tmp_path / "exercises.json"
    path.write_text("[{", encoding="utf-8")
    with pytest.raises(CatalogError):
        load_catalog(path)


@pytest.mark.parametrize(
    "items",
    [
        {"id": 1},
        [{"name": "No id"}],
        [{"id": 1, "name": ""}],
        ["not an object"],
    ],
)
def test_invalid_catalog_entries(items):
    with pytest.raises(CatalogError):
        Catalog.from_list(items)


def test_duplicate_ids_are_rejected():
    with pytest.raises(CatalogError):
        Catalog([ExerciseRecord("1", "A"), ExerciseRecord("1", "B")])


def test_catalog_keeps_order(catalog):
    assert [ex.name for ex in catalog][:3] == ["Bench Press", "Squat", "Deadlift"]
    assert catalog.records[0].id == "1"


def test_body_parts_listing(catalog):
    assert catalog.body_parts() == [
        "back",
        "biceps",
        "chest",
        "hamstrings",
        "lower back",
        "quadriceps",
        "upper back",
        "waist",
    ]


def test_bundled_catalog_loads():
    catalog = load_catalog(DEFAULT_CATALOG_PATH)
    assert len(catalog) > 0
    for record in catalog:
        assert record.id and record.name


def test_every_category_has_a_mapping():
    for cat_id, label, icon in CATEGORIES:
        assert cat_id in BODY_PART_MAPPING
        assert label and icon


def test_category_helpers():
    assert targets_for("back") == ["upper back", "lower back", "back"]
    assert targets_for("unknown") == []
    assert category_label("chest") == "Peito"
    assert category_label("unknown") == "unknown"
    assert body_part_label("Upper Back") == "Costas Superiores"
    assert body_part_label("tail") == "tail"
