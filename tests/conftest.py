import os
import sys
import time
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Kivy reads these on import: keep it away from pytest's argv and log files
os.environ.setdefault("KIVY_NO_ARGS", "1")
os.environ.setdefault("KIVY_NO_FILELOG", "1")
os.environ.setdefault("KIVY_LOG_MODE", "PYTHON")

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from backend import settings
from backend.catalog import Catalog, ExerciseRecord
from backend.errors import HydrationError, PersistenceError
from backend.favorites import FavoritesStore
from backend.history import ExerciseHistoryStore


class MemoryStorage:
    """In-memory stand-in for :class:`backend.storage.DocumentStorage`."""

    def __init__(self, documents=None):
        self.documents = dict(documents or {})
        self.fail_reads = False
        self.fail_writes = False
        self.writes = []

    def read(self, key):
        if self.fail_reads:
            raise HydrationError(key, "simulated read failure")
        return self.documents.get(key)

    def write(self, key, document):
        if self.fail_writes:
            raise PersistenceError(key, "simulated write failure")
        self.writes.append((key, document))
        self.documents[key] = document


FIXED_NOW = datetime(2024, 5, 1, 12, 30, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point the settings file at a temporary directory."""
    monkeypatch.setattr(settings, "SETTINGS_PATH", tmp_path / "settings.json")
    settings.clear_cache()
    yield
    settings.clear_cache()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def favorites(storage):
    store = FavoritesStore(storage)
    store.hydrate()
    return store


@pytest.fixture
def history(storage):
    store = ExerciseHistoryStore(storage, clock=lambda: FIXED_NOW)
    store.hydrate()
    return store


@pytest.fixture
def catalog():
    return Catalog(
        [
            ExerciseRecord("1", "Bench Press", ("chest",)),
            ExerciseRecord("2", "Squat", ("quadriceps",)),
            ExerciseRecord("3", "Deadlift", ("Lower Back", "hamstrings")),
            ExerciseRecord("4", "Pull-up", ("upper back", "biceps")),
            ExerciseRecord("5", "Barbell Row", ("back",)),
            ExerciseRecord("6", "Front Squat", ("quadriceps", "waist")),
        ]
    )


@pytest.fixture
def storage_factory():
    """Return the in-memory storage class for tests needing several stores."""
    return MemoryStorage


@pytest.fixture
def run_clock():
    """Return a helper ticking the Kivy clock until ``done()`` holds."""
    from kivy.clock import Clock

    def run(done, timeout=2.0):
        deadline = time.monotonic() + timeout
        while not done() and time.monotonic() < deadline:
            Clock.tick()
        return done()

    return run
