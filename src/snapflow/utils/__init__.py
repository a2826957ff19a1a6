"""Utility functions and helpers for snapflow."""

from snapflow.utils.datetime import (
    get_current_timestamp,
    parse_snapshot_instant,
    to_storage_timestamp,
    to_utc,
)
from snapflow.utils.decorators import traced

__all__ = [
    # DateTime utilities
    "get_current_timestamp",
    "parse_snapshot_instant",
    "to_storage_timestamp",
    "to_utc",
    # Decorators
    "traced",
]
