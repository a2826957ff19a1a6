"""Point-in-time snapshot reader.

A reader composes four stages for each pulled row::

    SnapshotQueryBuilder -> StreamingCursor -> EntityDecoder -> SequenceGuard

and yields the entities the guard accepts. Decoding runs before the guard
so a malformed row is always reported as such, never as an ordering
problem.
"""

from datetime import datetime
from typing import Callable, Generic, Iterator, Optional, Tuple, TypeVar, Union

from sqlalchemy.engine import Engine

from snapflow.common.exceptions import ReaderStateError
from snapflow.constants import DEFAULT_FETCH_SIZE
from snapflow.engine import SQLEngine
from snapflow.entities.kinds import EntityKind
from snapflow.entities.models import Entity
from snapflow.logging import get_logger
from snapflow.logging.filters import request_context
from snapflow.monitoring import ReadStatistics, get_reader_metrics
from snapflow.query_builder import SnapshotQueryBuilder
from snapflow.reader.cursor import StreamingCursor
from snapflow.reader.decoder import EntityDecoder
from snapflow.reader.guard import GuardResult, GuardState, SequenceGuard
from snapflow.tags import TagParser, parse_tags
from snapflow.utils.datetime import to_utc

logger = get_logger(__name__)

E = TypeVar("E", bound=Entity)


class SnapshotReader(Generic[E]):
    """Streams the state of a revision table as it was at an instant.

    Each identifier is emitted at most once, with its latest visible
    revision strictly before ``snapshot_instant``, in ascending identifier
    order. Revisions written at or after the instant are ignored, so the
    result is stable while the table keeps growing.

    A reader supports exactly one pass. Iterating it again raises
    ``ReaderStateError``; construct a new reader to read again. Readers are
    not safe for concurrent use.

    Example:
        >>> with SnapshotReader(engine, datetime(2024, 1, 1), NODE) as reader:
        ...     for node in reader:
        ...         print(node.id, node.latitude, node.longitude)
    """

    def __init__(
        self,
        engine: Union[SQLEngine, Engine],
        snapshot_instant: datetime,
        kind: EntityKind,
        *,
        tag_parser: TagParser = parse_tags,
        fetch_size: int = DEFAULT_FETCH_SIZE,
        query_builder: Optional[SnapshotQueryBuilder] = None,
        decoder: Optional[Callable[..., E]] = None,
        guard: Callable[[GuardState, Entity], GuardResult] = SequenceGuard.check,
    ):
        """Initialize the reader. No query runs until iteration starts.

        Args:
            engine: Engine the snapshot query runs against. A plain SQLAlchemy
                engine is wrapped in ``SQLEngine``.
            snapshot_instant: Revisions at or after this instant are excluded.
                Naive values are taken as UTC.
            kind: Entity kind to read
            tag_parser: Decoder for the raw tag column
            fetch_size: Rows buffered client-side per round trip
            query_builder: Builder for the snapshot query. Defaults to the
                kind's table under its default name.
            decoder: Row to entity function. Defaults to ``EntityDecoder``
                for ``kind`` and ``tag_parser``.
            guard: Ordering fold applied to every decoded entity
        """
        if isinstance(engine, Engine):
            engine = SQLEngine(engine=engine)
        self.engine = engine
        self.snapshot_instant = to_utc(snapshot_instant)
        self.kind = kind
        self.fetch_size = fetch_size
        self.query_builder = query_builder or SnapshotQueryBuilder(kind)
        self._decode = decoder or EntityDecoder(kind, tag_parser)
        self._guard = guard
        self.statistics = ReadStatistics(entity_kind=kind.name)
        self._stream: Optional[Iterator[E]] = None

    def __iter__(self) -> Iterator[E]:
        if self._stream is not None:
            raise ReaderStateError(
                "Snapshot reader has already been iterated; create a new reader to read again",
                details={"entity_kind": self.kind.name},
            )
        self._stream = self._read()
        return self._stream

    def _log_context(self):
        return request_context(
            snapshot_instant=self.snapshot_instant.isoformat(),
            entity_kind=self.kind.name,
        )

    def _read(self) -> Iterator[E]:
        # Log context is held around each step and released before every yield
        statistics = self.statistics
        statistics.start()
        try:
            with self._log_context():
                statement = self.query_builder.build()
                parameters = self.query_builder.build_parameters(self.snapshot_instant)
                cursor = StreamingCursor.open(self.engine, statement, parameters, self.fetch_size)
            with cursor:
                state = SequenceGuard.initial_state()
                while True:
                    with self._log_context():
                        state, entity = self._advance(cursor, state)
                    if entity is None:
                        return
                    yield entity
        except Exception as exc:
            with self._log_context():
                get_reader_metrics().record_failure(self.kind.name, exc)
            raise
        finally:
            with self._log_context():
                statistics.finish()
                get_reader_metrics().record_pass(statistics)
                logger.info("Snapshot read finished", extra=statistics.to_dict())

    def _advance(self, cursor: StreamingCursor, state: GuardState) -> Tuple[GuardState, Optional[E]]:
        """Pull rows until the guard accepts one.

        Returns:
            The guard state and the accepted entity, or None at end of stream
        """
        statistics = self.statistics
        row = cursor.next()
        while row is not None:
            statistics.rows_read += 1
            entity = self._decode(row)
            state, usable = self._guard(state, entity)
            if usable:
                statistics.entities_emitted += 1
                return state, entity
            statistics.duplicates_suppressed += 1
            row = cursor.next()
        return state, None

    def close(self) -> None:
        """Stop the pass early and release the cursor. Safe to call repeatedly."""
        if self._stream is not None:
            self._stream.close()

    def __enter__(self) -> "SnapshotReader[E]":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
