"""DateTime utilities for snapshot instants.

Revision timestamps are stored as naive UTC values, so every instant that
reaches the storage engine is normalized to that form first.
"""

from datetime import datetime, timezone
from typing import Union


def get_current_timestamp() -> datetime:
    """Get current UTC timestamp.

    Returns:
        Current timezone-aware UTC datetime
    """
    return datetime.now(timezone.utc)


def to_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime.

    Naive values are taken to already be in UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_storage_timestamp(value: datetime) -> datetime:
    """Return ``value`` as a naive UTC datetime, the form bound to queries."""
    return to_utc(value).replace(tzinfo=None)


def parse_snapshot_instant(value: Union[str, datetime]) -> datetime:
    """Parse a snapshot instant into an aware UTC datetime.

    Args:
        value: ISO-8601 text (a trailing ``Z`` is accepted) or a datetime

    Returns:
        Timezone-aware UTC datetime

    Raises:
        ValueError: If the text is not a valid ISO-8601 timestamp

    Example:
        >>> parse_snapshot_instant("2024-01-15T10:30:00Z")
        datetime.datetime(2024, 1, 15, 10, 30, tzinfo=datetime.timezone.utc)
    """
    if isinstance(value, datetime):
        return to_utc(value)

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return to_utc(datetime.fromisoformat(text))
