from datetime import datetime, timedelta, timezone

import pytest

from backend.utils import parse_reps, parse_weight, utc_timestamp


@pytest.mark.parametrize(
    "text,expected",
    [
        ("80", 80.0),
        ("82.5", 82.5),
        (" 60kg", 60.0),
        (".5", 0.5),
        ("-10", -10.0),
        ("1e2", 100.0),
        ("80,5", 80.0),
        ("abc", 0.0),
        ("", 0.0),
        (None, 0.0),
    ],
)
def test_parse_weight(text, expected):
    assert parse_weight(text) == expected


@pytest.mark.parametrize(
    "text,expected",
    [
        ("8", 8),
        ("8.9", 8),
        ("12 reps", 12),
        ("  3", 3),
        ("x", 0),
        ("", 0),
        (None, 0),
    ],
)
def test_parse_reps(text, expected):
    assert parse_reps(text) == expected


def test_utc_timestamp_format():
    moment = datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)
    assert utc_timestamp(moment) == "2024-01-02T03:04:05.678Z"


def test_utc_timestamp_converts_offsets():
    moment = datetime(2024, 1, 2, 5, 0, 0, tzinfo=timezone(timedelta(hours=2)))
    assert utc_timestamp(moment) == "2024-01-02T03:00:00.000Z"


def test_utc_timestamp_defaults_to_now():
    stamp = utc_timestamp()
    assert stamp.endswith("Z")
    assert datetime.fromisoformat(stamp[:-1]).year >= 2024
