"""Revision table definitions.

Each entity kind is stored in its own table holding every revision of
every entity. ``(id, timestamp)`` is indexed so the snapshot query can
find the latest revision per identifier without scanning.
"""

from typing import Optional

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    DateTime,
    Float,
    Index,
    MetaData,
    Table,
    Text,
)


def _revision_columns():
    return [
        Column("id", BigInteger, nullable=False),
        Column("timestamp", DateTime, nullable=False),
    ]


def node_table(metadata: Optional[MetaData] = None, name: str = "nodes") -> Table:
    """Build the revision table for nodes."""
    return Table(
        name,
        metadata if metadata is not None else MetaData(),
        *_revision_columns(),
        Column("latitude", Float, nullable=False),
        Column("longitude", Float, nullable=False),
        Column("tags", Text, nullable=True),
        Column("visible", Boolean, nullable=False, default=True),
        Index(f"ix_{name}_id_timestamp", "id", "timestamp"),
    )


def segment_table(metadata: Optional[MetaData] = None, name: str = "segments") -> Table:
    """Build the revision table for segments."""
    return Table(
        name,
        metadata if metadata is not None else MetaData(),
        *_revision_columns(),
        Column("node_a", BigInteger, nullable=False),
        Column("node_b", BigInteger, nullable=False),
        Column("tags", Text, nullable=True),
        Column("visible", Boolean, nullable=False, default=True),
        Index(f"ix_{name}_id_timestamp", "id", "timestamp"),
    )
