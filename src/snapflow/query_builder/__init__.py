"""Query builders for snapshot reads.

Builders only generate SQLAlchemy statements and their bind parameters;
executing them is the streaming cursor's job.

Example:
    >>> from snapflow.query_builder import get_query_builder
    >>> builder = get_query_builder("node")
    >>> print(builder.render())  # doctest: +SKIP
"""

from snapflow.query_builder.snapshot import SnapshotQueryBuilder
from snapflow.query_builder.factory import get_query_builder

__all__ = [
    "SnapshotQueryBuilder",
    "get_query_builder",
]
