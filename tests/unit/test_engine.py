"""Tests for SQLEngine."""

import pytest
from sqlalchemy import text

from snapflow.common.exceptions import ConfigurationError, ConnectivityError
from snapflow.engine import SQLEngine
from snapflow.settings import DatabaseSettings


class TestSQLEngineInit:

    def test_requires_settings_or_engine(self):
        with pytest.raises(ConfigurationError):
            SQLEngine()

    def test_engine_is_created_lazily(self, db_url):
        engine = SQLEngine(settings=DatabaseSettings(url=db_url))
        assert engine._engine is None

        assert engine.dialect_name == "sqlite"
        assert engine._engine is not None
        engine.dispose()

    def test_unconfigured_settings(self):
        engine = SQLEngine(settings=DatabaseSettings(url=None, database=None))
        with pytest.raises(ConfigurationError) as exc_info:
            engine.engine
        assert exc_info.value.details["config_key"] == "database"

    def test_wraps_existing_engine(self, sa_engine):
        engine = SQLEngine(engine=sa_engine)
        assert engine.engine is sa_engine
        assert engine.get_connection_info()["dialect"] == "sqlite"


class TestSQLEngineConnect:

    def test_connect_releases_connection(self, sql_engine, sa_engine):
        with sql_engine.connect() as conn:
            assert conn.execute(text("SELECT 1")).scalar_one() == 1
            assert sa_engine.pool.checkedout() == 1
        assert sa_engine.pool.checkedout() == 0

    def test_connection_settings_hook(self, sa_engine):
        applied = []

        class TracingEngine(SQLEngine):
            def _apply_connection_settings(self, conn):
                applied.append(conn)

        with TracingEngine(engine=sa_engine).connect() as conn:
            assert applied == [conn]

    def test_unreachable_database(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'missing' / 'revisions.db'}"
        engine = SQLEngine(settings=DatabaseSettings(url=url))

        with pytest.raises(ConnectivityError):
            with engine.connect():
                pass

    def test_test_connection(self, sql_engine, tmp_path):
        assert sql_engine.test_connection() is True

        broken = SQLEngine(settings=DatabaseSettings(url=f"sqlite:///{tmp_path / 'no' / 'db.sqlite'}"))
        assert broken.test_connection() is False


class TestSQLEngineDispose:

    def test_dispose_owned_engine(self, db_url):
        engine = SQLEngine(settings=DatabaseSettings(url=db_url))
        engine.engine
        engine.dispose()
        assert engine._engine is None

    def test_caller_engine_is_kept(self, sa_engine):
        engine = SQLEngine(engine=sa_engine)
        engine.dispose()
        assert engine.engine is sa_engine
