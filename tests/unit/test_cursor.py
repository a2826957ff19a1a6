"""Tests for the streaming cursor against a SQLite database."""

from unittest.mock import patch

import pytest
from sqlalchemy import create_engine, select, text
from sqlalchemy.engine import MappingResult
from sqlalchemy.exc import DBAPIError

from snapflow.common.exceptions import ConnectivityError, QueryExecutionError
from snapflow.engine import SQLEngine
from snapflow.reader.cursor import StreamingCursor
from tests.conftest import node_row, ts


@pytest.fixture
def populated(insert_rows, tables):
    insert_rows("node", node_row(1, ts(1)), node_row(2, ts(1)), node_row(3, ts(1)))
    return tables["node"]


class TestStreamingCursor:

    def test_pulls_rows_then_signals_end(self, sql_engine, populated):
        statement = select(populated.c.id).order_by(populated.c.id)
        cursor = StreamingCursor.open(sql_engine, statement, fetch_size=2)

        ids = []
        row = cursor.next()
        while row is not None:
            ids.append(row["id"])
            row = cursor.next()

        assert ids == [1, 2, 3]
        assert cursor.closed
        assert cursor.next() is None

    def test_exhaustion_releases_connection(self, sql_engine, sa_engine, populated):
        cursor = StreamingCursor.open(sql_engine, select(populated.c.id))
        assert sa_engine.pool.checkedout() == 1

        list(cursor)

        assert sa_engine.pool.checkedout() == 0

    def test_close_before_exhaustion_releases_connection(self, sql_engine, sa_engine, populated):
        with StreamingCursor.open(sql_engine, select(populated.c.id)) as cursor:
            assert cursor.next() is not None
        assert cursor.closed
        assert sa_engine.pool.checkedout() == 0

        cursor.close()  # idempotent

    def test_binds_parameters(self, sql_engine, populated):
        statement = text("SELECT id FROM nodes WHERE id > :min_id ORDER BY id")
        with StreamingCursor.open(sql_engine, statement, {"min_id": 1}) as cursor:
            assert [row["id"] for row in cursor] == [2, 3]

    def test_rejected_statement_raises_query_execution_error(self, sql_engine, sa_engine, tables):
        with pytest.raises(QueryExecutionError) as exc_info:
            StreamingCursor.open(sql_engine, text("SELECT id FROM missing_table"))

        assert "missing_table" in exc_info.value.details["query"]
        assert sa_engine.pool.checkedout() == 0

    def test_unreachable_database_raises_connectivity_error(self, tmp_path):
        engine = create_engine(f"sqlite:///{tmp_path / 'absent' / 'dir' / 'db.sqlite'}")
        try:
            with pytest.raises(ConnectivityError):
                StreamingCursor.open(SQLEngine(engine=engine), text("SELECT 1"))
        finally:
            engine.dispose()


class TestStreamingCursorFetchFailures:

    def _failing_fetch(self, connection_invalidated):
        error = DBAPIError(
            "SELECT id FROM nodes", {}, Exception("server has gone away"),
            connection_invalidated=connection_invalidated,
        )
        return patch.object(MappingResult, "fetchone", side_effect=error)

    def test_lost_connection_raises_connectivity_error(self, sql_engine, sa_engine, populated):
        cursor = StreamingCursor.open(sql_engine, select(populated.c.id).order_by(populated.c.id))
        assert cursor.next()["id"] == 1

        with self._failing_fetch(connection_invalidated=True):
            with pytest.raises(ConnectivityError):
                cursor.next()

        assert cursor.closed
        assert cursor.next() is None
        assert sa_engine.pool.checkedout() == 0

    def test_fetch_error_raises_query_execution_error(self, sql_engine, sa_engine, populated):
        cursor = StreamingCursor.open(sql_engine, select(populated.c.id))
        cursor.next()

        with self._failing_fetch(connection_invalidated=False):
            with pytest.raises(QueryExecutionError) as exc_info:
                cursor.next()

        assert "SELECT" in exc_info.value.details["query"]
        assert cursor.closed
        assert sa_engine.pool.checkedout() == 0
