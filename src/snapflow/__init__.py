from snapflow.__version__ import __version__

from snapflow.api import open_reader, read_snapshot
from snapflow.common.exceptions import (
    SnapflowError,
    ErrorCode,
    ConfigurationError,
    ConnectivityError,
    QueryExecutionError,
    MalformedRowError,
    OrderingViolationError,
    MultipleRevisionsError,
    ReaderStateError,
)
from snapflow.engine import SQLEngine
from snapflow.entities import NODE, SEGMENT, Entity, EntityKind, Node, Segment, get_entity_kind
from snapflow.reader import SnapshotReader
from snapflow.tags import format_tags, parse_tags

__all__ = [
    "__version__",

    # Entry points
    "open_reader",
    "read_snapshot",
    "SnapshotReader",
    "SQLEngine",

    # Entities
    "Entity",
    "Node",
    "Segment",
    "EntityKind",
    "NODE",
    "SEGMENT",
    "get_entity_kind",

    # Tags
    "parse_tags",
    "format_tags",

    # Exceptions (public API)
    "SnapflowError",
    "ErrorCode",
    "ConfigurationError",
    "ConnectivityError",
    "QueryExecutionError",
    "MalformedRowError",
    "OrderingViolationError",
    "MultipleRevisionsError",
    "ReaderStateError",
]
