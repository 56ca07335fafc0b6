"""Per-exercise personal records.

For every exercise the store keeps the most recently performed set and the
best weight and best rep count ever performed.  The two bests are tracked
independently: a heavy set can raise the best weight while a lighter set
with more reps raises the best reps.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Callable

from kivy.event import EventDispatcher
from kivy.properties import AliasProperty, BooleanProperty, NumericProperty

from . import HISTORY_STORAGE_KEY
from .errors import StorageError
from .storage import DocumentStorage
from .utils import parse_reps, parse_weight, utc_timestamp
from .write_behind import WriteBehind


@dataclass(frozen=True)
class PersonalRecord:
    """Last and best performance of one exercise.

    Values are kept exactly as the user typed them; they are only parsed
    for comparisons.
    """

    last_weight: str
    last_reps: str
    best_weight: str
    best_reps: str
    last_date: str

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "PersonalRecord":
        def text(name: str) -> str:
            value = data.get(name)
            return "" if value is None else str(value)

        return cls(
            last_weight=text("last_weight"),
            last_reps=text("last_reps"),
            best_weight=text("best_weight"),
            best_reps=text("best_reps"),
            last_date=text("last_date"),
        )


def _as_text(value) -> str:
    return "" if value is None else str(value)


def format_previous(record: PersonalRecord | None, unit: str = "kg") -> str:
    """Return the "previous set" hint shown next to a set, e.g. ``80kg x 8``."""
    if record is None or not record.last_weight:
        return "-"
    return f"{record.last_weight}{unit} x {record.last_reps}"


def format_best(record: PersonalRecord | None, unit: str = "kg") -> str:
    if record is None:
        return "-"
    return f"{record.best_weight or 0}{unit} / {record.best_reps or 0} reps"


class ExerciseHistoryStore(EventDispatcher):
    """Mapping of exercise id to :class:`PersonalRecord`.

    :attr:`history` is a read-only snapshot that is replaced on every change,
    so consumers can bind to it.  Mutations commit to memory synchronously and
    schedule a write of the whole mapping.
    """

    revision = NumericProperty(0)
    loaded = BooleanProperty(False)

    __events__ = ("on_persisted",)

    def _get_history(self):
        return MappingProxyType(dict(getattr(self, "_records", {})))

    history = AliasProperty(_get_history, None, bind=["revision"], cache=True)

    def __init__(
        self,
        storage: DocumentStorage,
        key: str = HISTORY_STORAGE_KEY,
        write_delay: float = 0.0,
        clock: Callable[[], datetime] | None = None,
        **kwargs,
    ) -> None:
        self._records: dict[str, PersonalRecord] = {}
        super().__init__(**kwargs)
        self.storage = storage
        self.key = key
        self.clock = clock
        self._writer = WriteBehind(
            storage, key, delay=write_delay, on_complete=self._on_write_complete
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def hydrate(self) -> None:
        """Load the stored history once.

        Unreadable documents are logged and ignored.  Entries that are not
        objects are skipped so one bad record does not discard the rest.
        """

        if self.loaded:
            return
        try:
            stored = self.storage.read(self.key)
        except StorageError:
            logging.exception("Failed to load exercise history")
            stored = None
        if stored is not None:
            if isinstance(stored, dict):
                records = {}
                for exercise_id, data in stored.items():
                    if not isinstance(data, dict):
                        logging.warning(
                            "Skipping malformed history entry for %s", exercise_id
                        )
                        continue
                    records[str(exercise_id)] = PersonalRecord.from_dict(data)
                # the stored history replaces anything recorded before loading
                self._writer.cancel()
                self._records = records
                self.revision += 1
            else:
                logging.warning(
                    "Ignoring stored history: expected an object, got %s",
                    type(stored).__name__,
                )
        self.loaded = True

    @property
    def pending_writes(self) -> int:
        return self._writer.pending

    def flush(self) -> None:
        """Write any pending changes to storage immediately."""
        self._writer.flush()

    # ------------------------------------------------------------------
    # Queries and updates
    # ------------------------------------------------------------------
    def get_history(self, exercise_id) -> PersonalRecord | None:
        return self._records.get(str(exercise_id))

    def check_is_pr(self, exercise_id, weight, reps) -> bool:
        """Return ``True`` if ``weight`` or ``reps`` beats the recorded best.

        The first performance of an exercise is never a PR and ties do not
        count.  Call this before :meth:`update_history`, which would otherwise
        compare the set against itself.
        """

        current = self._records.get(str(exercise_id))
        if current is None:
            return False
        return parse_weight(weight) > parse_weight(current.best_weight) or (
            parse_reps(reps) > parse_reps(current.best_reps)
        )

    def update_history(self, exercise_id, weight, reps) -> PersonalRecord:
        """Record a performed set and return the committed record."""

        exercise_id = str(exercise_id)
        weight = _as_text(weight)
        reps = _as_text(reps)
        current = self._records.get(exercise_id)
        best_weight = parse_weight(current.best_weight) if current else 0.0
        best_reps = parse_reps(current.best_reps) if current else 0

        if parse_weight(weight) > best_weight:
            new_best_weight = weight
        else:
            new_best_weight = (current and current.best_weight) or weight
        if parse_reps(reps) > best_reps:
            new_best_reps = reps
        else:
            new_best_reps = (current and current.best_reps) or reps

        record = PersonalRecord(
            last_weight=weight,
            last_reps=reps,
            best_weight=new_best_weight,
            best_reps=new_best_reps,
            last_date=utc_timestamp(self.clock() if self.clock else None),
        )
        self._records = {**self._records, exercise_id: record}
        self._commit()
        return record

    def record_set(self, exercise_id, weight, reps) -> bool:
        """Record a completed set and report whether it was a PR.

        Sets missing either the weight or the rep count are not recorded.
        """

        if not weight or not reps:
            return False
        is_pr = self.check_is_pr(exercise_id, weight, reps)
        self.update_history(exercise_id, weight, reps)
        return is_pr

    def _commit(self) -> None:
        self.revision += 1
        self._writer.schedule(
            {key: record.to_dict() for key, record in self._records.items()}
        )

    def _on_write_complete(self, key: str, ok: bool) -> None:
        self.dispatch("on_persisted", ok)

    def on_persisted(self, ok: bool) -> None:
        pass
