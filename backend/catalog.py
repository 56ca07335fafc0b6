"""Read-only exercise catalog bundled with the application."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from . import DEFAULT_CATALOG_PATH
from .errors import CatalogError


@dataclass(frozen=True)
class ExerciseRecord:
    """One catalog entry."""

    id: str
    name: str
    body_parts: tuple[str, ...] = ()
    image_ref: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "ExerciseRecord":
        if data.get("id") is None or not data.get("name"):
            raise CatalogError(f"Exercise entry without id or name: {data!r}")
        parts = data.get("body_parts") or ()
        if isinstance(parts, str):
            parts = (parts,)
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            body_parts=tuple(str(p) for p in parts),
            image_ref=data.get("image_url") or data.get("image_ref") or None,
        )


class Catalog:
    """Ordered, immutable collection of :class:`ExerciseRecord`."""

    def __init__(self, records: Iterable[ExerciseRecord]) -> None:
        self._records = tuple(records)
        self._by_id: dict[str, ExerciseRecord] = {}
        for record in self._records:
            if record.id in self._by_id:
                raise CatalogError(f"Duplicate exercise id {record.id!r}")
            self._by_id[record.id] = record

    def __iter__(self) -> Iterator[ExerciseRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, exercise_id) -> bool:
        return str(exercise_id) in self._by_id

    @property
    def records(self) -> tuple[ExerciseRecord, ...]:
        return self._records

    def get(self, exercise_id) -> ExerciseRecord | None:
        return self._by_id.get(str(exercise_id))

    def body_parts(self) -> list[str]:
        """Return the distinct body-part tags, lower-cased and sorted."""
        parts = {part.lower() for record in self._records for part in record.body_parts}
        return sorted(parts)

    @classmethod
    def from_list(cls, items: list) -> "Catalog":
        if not isinstance(items, list):
            raise CatalogError("Exercise catalog must be a list")
        records = []
        for item in items:
            if not isinstance(item, dict):
                raise CatalogError(f"Exercise entry is not an object: {item!r}")
            records.append(ExerciseRecord.from_dict(item))
        return cls(records)


def load_catalog(path: Path | str = DEFAULT_CATALOG_PATH) -> Catalog:
    """Load the catalog stored as a JSON list at ``path``."""

    try:
        with Path(path).open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, ValueError) as exc:
        raise CatalogError(f"Cannot load exercise catalog from {path}: {exc}") from exc
    return Catalog.from_list(data)
