"""Shared fixtures: a SQLite file holding node and segment revision tables."""

from datetime import datetime
from typing import Any, Dict, Optional

import pytest
from sqlalchemy import MetaData, create_engine, insert

from snapflow.engine import SQLEngine
from snapflow.entities import NODE, SEGMENT


def ts(day: int, hour: int = 0) -> datetime:
    """Naive UTC timestamp in January 2024."""
    return datetime(2024, 1, day, hour)


def node_row(
    id: int,
    timestamp: datetime,
    latitude: float = 0.0,
    longitude: float = 0.0,
    tags: Optional[str] = None,
    visible: bool = True,
) -> Dict[str, Any]:
    return {
        "id": id,
        "timestamp": timestamp,
        "latitude": latitude,
        "longitude": longitude,
        "tags": tags,
        "visible": visible,
    }


def segment_row(
    id: int,
    timestamp: datetime,
    node_a: int,
    node_b: int,
    tags: Optional[str] = None,
    visible: bool = True,
) -> Dict[str, Any]:
    return {
        "id": id,
        "timestamp": timestamp,
        "node_a": node_a,
        "node_b": node_b,
        "tags": tags,
        "visible": visible,
    }


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'revisions.db'}"


@pytest.fixture
def sa_engine(db_url):
    engine = create_engine(db_url)
    yield engine
    engine.dispose()


@pytest.fixture
def tables(sa_engine):
    metadata = MetaData()
    created = {
        "node": NODE.table(metadata=metadata),
        "segment": SEGMENT.table(metadata=metadata),
    }
    metadata.create_all(sa_engine)
    return created


@pytest.fixture
def sql_engine(sa_engine):
    return SQLEngine(engine=sa_engine)


@pytest.fixture
def insert_rows(sa_engine, tables):
    """Insert revision rows into the table of the given kind."""

    def _insert(kind: str, *rows: Dict[str, Any]) -> None:
        with sa_engine.begin() as conn:
            conn.execute(insert(tables[kind]), list(rows))

    return _insert
