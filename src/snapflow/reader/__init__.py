"""Snapshot reading pipeline.

Stages:
    - StreamingCursor: forward-only execution with bounded buffering
    - EntityDecoder: raw row to typed entity
    - SequenceGuard: ascending identifiers, duplicate collapse
    - SnapshotReader: composes the stages into a lazy, single-pass stream
"""

from snapflow.reader.cursor import StreamingCursor
from snapflow.reader.decoder import EntityDecoder
from snapflow.reader.guard import GuardPhase, GuardResult, GuardState, SequenceGuard
from snapflow.reader.reader import SnapshotReader

__all__ = [
    "StreamingCursor",
    "EntityDecoder",
    "GuardPhase",
    "GuardState",
    "GuardResult",
    "SequenceGuard",
    "SnapshotReader",
]
