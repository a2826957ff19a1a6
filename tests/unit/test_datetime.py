from datetime import datetime, timedelta, timezone

import pytest

from snapflow.utils.datetime import (
    get_current_timestamp,
    parse_snapshot_instant,
    to_storage_timestamp,
    to_utc,
)


def test_current_timestamp_is_aware():
    assert get_current_timestamp().tzinfo is timezone.utc


def test_naive_is_taken_as_utc():
    assert to_utc(datetime(2024, 1, 1, 5)) == datetime(2024, 1, 1, 5, tzinfo=timezone.utc)


def test_storage_timestamp_is_naive_utc():
    value = datetime(2024, 1, 1, 5, tzinfo=timezone(timedelta(hours=-3)))
    assert to_storage_timestamp(value) == datetime(2024, 1, 1, 8)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("2024-01-15T10:30:00Z", datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)),
        ("2024-01-15T10:30:00+01:00", datetime(2024, 1, 15, 9, 30, tzinfo=timezone.utc)),
        ("2024-01-15 10:30:00", datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)),
    ],
)
def test_parse_snapshot_instant(text, expected):
    assert parse_snapshot_instant(text) == expected


def test_parse_rejects_garbage():
    with pytest.raises(ValueError):
        parse_snapshot_instant("not a date")
