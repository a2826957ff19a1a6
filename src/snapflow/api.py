"""Public entry points for reading snapshots.

These functions wire settings, engine, query builder and reader together
so a caller only supplies the instant and the entity kind.

Example:
    >>> from snapflow import read_snapshot
    >>> for node in read_snapshot("2024-01-01T00:00:00Z", kind="node"):
    ...     print(node.id, node.tags)
"""

from datetime import datetime
from typing import TYPE_CHECKING, Iterator, Optional, Union

from sqlalchemy.engine import Engine

from snapflow.constants import EntityType
from snapflow.engine import SQLEngine
from snapflow.entities import Entity, EntityKind
from snapflow.query_builder import get_query_builder
from snapflow.reader import SnapshotReader
from snapflow.tags import TagParser, parse_tags
from snapflow.utils.datetime import parse_snapshot_instant

if TYPE_CHECKING:
    from snapflow.settings.main import _Settings


def open_reader(
    snapshot_instant: Union[str, datetime],
    kind: Union[EntityKind, EntityType, str] = EntityType.NODE,
    *,
    engine: Optional[Union[SQLEngine, Engine]] = None,
    settings: Optional["_Settings"] = None,
    tag_parser: TagParser = parse_tags,
) -> SnapshotReader:
    """Create a reader for ``kind`` as of ``snapshot_instant``.

    Args:
        snapshot_instant: Datetime or ISO-8601 text
        kind: Entity kind, enum member or kind name
        engine: Engine to read from. Defaults to one built from settings.
        settings: Settings for table names, fetch size and, when no engine
            is given, the connection. Defaults to the settings singleton.
        tag_parser: Decoder for the raw tag column

    Returns:
        Reader ready for a single pass

    Raises:
        ValueError: If the kind is unknown or the instant cannot be parsed
        ConfigurationError: If no engine is given and no database is configured
    """
    if settings is None:
        from snapflow.settings import get_settings
        settings = get_settings()

    if engine is None:
        engine = SQLEngine(settings=settings.database)

    builder = get_query_builder(kind, settings)
    return SnapshotReader(
        engine,
        parse_snapshot_instant(snapshot_instant),
        builder.kind,
        tag_parser=tag_parser,
        fetch_size=settings.reader.fetch_size,
        query_builder=builder,
    )


def read_snapshot(
    snapshot_instant: Union[str, datetime],
    kind: Union[EntityKind, EntityType, str] = EntityType.NODE,
    **kwargs,
) -> Iterator[Entity]:
    """Stream every entity of ``kind`` as it was at ``snapshot_instant``.

    Accepts the same keyword arguments as ``open_reader``. The reader is
    closed when the returned iterator is exhausted or closed, and an engine
    built from settings here is disposed with it.
    """
    owned_engine: Optional[SQLEngine] = None
    if kwargs.get("engine") is None:
        settings = kwargs.get("settings")
        if settings is None:
            from snapflow.settings import get_settings
            settings = kwargs["settings"] = get_settings()
        owned_engine = kwargs["engine"] = SQLEngine(settings=settings.database)

    try:
        with open_reader(snapshot_instant, kind, **kwargs) as reader:
            yield from reader
    finally:
        if owned_engine is not None:
            owned_engine.dispose()
