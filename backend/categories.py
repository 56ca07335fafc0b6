"""Library categories and their body-part tags.

Category ids are what the library screen selects.  ``all`` and
``favorites`` are special; every other category lists the catalog body-part
substrings it matches.
"""

from __future__ import annotations

ALL = "all"
FAVORITES = "favorites"

# (id, label, icon) in display order
CATEGORIES: list[tuple[str, str, str]] = [
    (ALL, "Todos", "view-grid-outline"),
    (FAVORITES, "Favoritos", "heart"),
    ("cardio", "Cardio", "run"),
    ("chest", "Peito", "human"),
    ("back", "Costas", "human-handsdown"),
    ("biceps", "Bíceps", "arm-flex"),
    ("triceps", "Tríceps", "arm-flex-outline"),
    ("quadriceps", "Quadríceps", "shoe-print"),
    ("hamstrings", "Posteriores", "walk"),
    ("shoulders", "Ombros", "hand-back-left"),
    ("hips", "Quadris", "human-female"),
    ("waist", "Cintura", "arrow-expand-horizontal"),
    ("upper_arms", "Braços", "hand-back-right"),
    ("calves", "Panturrilhas", "shoe-print"),
    ("forearms", "Antebraços", "hand-back-left-outline"),
    ("neck", "Pescoço", "account"),
]

BODY_PART_MAPPING: dict[str, list[str]] = {
    ALL: [],
    FAVORITES: [],
    "cardio": ["cardio"],
    "chest": ["chest"],
    "back": ["upper back", "lower back", "back"],
    "biceps": ["biceps"],
    "triceps": ["triceps"],
    "quadriceps": ["quadriceps"],
    "hamstrings": ["hamstrings"],
    "shoulders": ["shoulders"],
    "hips": ["hips"],
    "waist": ["waist"],
    "upper_arms": ["upper arms"],
    "calves": ["calves"],
    "forearms": ["forearms"],
    "neck": ["neck"],
}

BODY_PART_TRANSLATION: dict[str, str] = {
    "chest": "Peito",
    "back": "Costas",
    "upper back": "Costas Superiores",
    "lower back": "Costas Inferiores",
    "biceps": "Bíceps",
    "triceps": "Tríceps",
    "quadriceps": "Quadríceps",
    "hamstrings": "Posteriores",
    "shoulders": "Ombros",
    "hips": "Quadris",
    "waist": "Cintura",
    "upper arms": "Braços",
    "calves": "Panturrilhas",
    "forearms": "Antebraços",
    "neck": "Pescoço",
    "cardio": "Cardio",
    "glutes": "Glúteos",
    "abs": "Abdômen",
    "abdominals": "Abdominais",
    "lats": "Dorsais",
}


def targets_for(category: str) -> list[str]:
    """Return the lower-cased body-part substrings ``category`` matches."""
    return [t.lower() for t in BODY_PART_MAPPING.get(category, [])]


def category_label(category: str) -> str:
    for cat_id, label, _icon in CATEGORIES:
        if cat_id == category:
            return label
    return category


def body_part_label(part: str) -> str:
    """Translate a catalog body-part tag for display, falling back to the tag."""
    return BODY_PART_TRANSLATION.get(part.lower(), part)
