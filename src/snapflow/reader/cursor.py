"""Forward-only streaming execution of snapshot queries."""

from contextlib import ExitStack
from typing import Any, Dict, Iterator, Mapping, Optional

from sqlalchemy.engine import RowMapping
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.sql import Executable

from snapflow.common.exceptions import (
    SnapflowError,
    connection_error,
    query_execution_error,
)
from snapflow.constants import DEFAULT_FETCH_SIZE
from snapflow.engine import SQLEngine
from snapflow.logging import get_logger
from snapflow.utils.decorators import traced

logger = get_logger(__name__)


def _execution_failure(statement: Executable, error: SQLAlchemyError) -> SnapflowError:
    """Map an engine error to the snapflow taxonomy.

    A DBAPI error that invalidated the connection means the session is
    gone; anything else is the engine rejecting or failing the statement.
    """
    if isinstance(error, DBAPIError) and error.connection_invalidated:
        return connection_error("Lost connection to the storage engine while streaming", cause=error)
    return query_execution_error(str(statement), error)


def _open_span_attributes(cls, engine, statement, parameters=None, fetch_size=DEFAULT_FETCH_SIZE) -> Dict[str, Any]:
    info = engine.get_connection_info()
    return {
        "db.system": info.get("dialect"),
        "db.name": info.get("database"),
        "db.operation": "stream",
        "snapflow.fetch_size": fetch_size,
    }


class StreamingCursor:
    """Pull-based cursor over a statement executed in streaming mode.

    The cursor owns its connection and result for its whole lifetime and
    releases both when the stream is exhausted, when fetching fails, or
    when ``close()`` is called, whichever comes first. The client buffer
    holds at most ``fetch_size`` rows.

    Example:
        >>> with StreamingCursor.open(engine, statement, params) as cursor:
        ...     row = cursor.next()
        ...     while row is not None:
        ...         handle(row)
        ...         row = cursor.next()
    """

    def __init__(self, resources: ExitStack, rows, statement: Executable):
        self._resources = resources
        self._rows = rows
        self._statement = statement
        self._closed = False

    @classmethod
    @traced(span_name="snapflow.cursor.open", attribute_getter=_open_span_attributes)
    def open(
        cls,
        engine: SQLEngine,
        statement: Executable,
        parameters: Optional[Mapping[str, Any]] = None,
        fetch_size: int = DEFAULT_FETCH_SIZE,
    ) -> "StreamingCursor":
        """Begin streaming execution of ``statement``.

        Args:
            engine: Engine to acquire the connection from
            statement: Statement to execute
            parameters: Bind parameter values
            fetch_size: Rows buffered client-side per round trip

        Returns:
            Open cursor positioned before the first row

        Raises:
            ConnectivityError: If no connection can be acquired or the
                session is lost during execution
            QueryExecutionError: If the engine rejects the statement
        """
        resources = ExitStack()
        try:
            conn = resources.enter_context(engine.connect())
            try:
                result = conn.execution_options(yield_per=fetch_size).execute(
                    statement, dict(parameters or {})
                )
            except SQLAlchemyError as e:
                raise _execution_failure(statement, e)
            resources.callback(result.close)
        except BaseException:
            resources.close()
            raise

        logger.debug("Streaming cursor opened", extra={"fetch_size": fetch_size})
        return cls(resources, result.mappings(), statement)

    @property
    def closed(self) -> bool:
        return self._closed

    def next(self) -> Optional[RowMapping]:
        """Pull the next row.

        Returns:
            The next row, or None once the stream is exhausted

        Raises:
            ConnectivityError: If the session is lost while fetching
            QueryExecutionError: If the engine fails while fetching
        """
        if self._closed:
            return None

        try:
            row = self._rows.fetchone()
        except SQLAlchemyError as e:
            self.close()
            raise _execution_failure(self._statement, e)

        if row is None:
            self.close()
        return row

    def close(self) -> None:
        """Release the result and connection. Safe to call repeatedly."""
        if self._closed:
            return
        self._closed = True
        self._resources.close()
        logger.debug("Streaming cursor closed")

    def __iter__(self) -> Iterator[RowMapping]:
        return self

    def __next__(self) -> RowMapping:
        row = self.next()
        if row is None:
            raise StopIteration
        return row

    def __enter__(self) -> "StreamingCursor":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
