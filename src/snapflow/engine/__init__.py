"""Storage engine access built on SQLAlchemy."""

from snapflow.engine.sql_engine import SQLEngine

__all__ = ["SQLEngine"]
