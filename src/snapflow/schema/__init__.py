"""SQLAlchemy definitions of the revision tables read by snapflow."""

from snapflow.schema.tables import node_table, segment_table

__all__ = [
    "node_table",
    "segment_table",
]
