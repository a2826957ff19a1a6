"""Snapshot query construction.

The snapshot query selects, for every identifier, the revision with the
greatest timestamp strictly before the snapshot instant, then joins back
to the revision table on ``(id, timestamp)`` to pick up the remaining
columns. Only visible revisions survive and rows come out in ascending
identifier order.

The "latest before the instant" timestamp is computed once per identifier
in a grouped subquery, so the engine can answer it from the
``(id, timestamp)`` index instead of a correlated subquery per row.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import DateTime, Table, and_, bindparam, func, select, true
from sqlalchemy.engine import Dialect
from sqlalchemy.sql import Select

from snapflow.constants import SNAPSHOT_INSTANT_PARAM
from snapflow.entities.kinds import EntityKind
from snapflow.utils.datetime import to_storage_timestamp


class SnapshotQueryBuilder:
    """Builds the parameterized snapshot query for one entity kind.

    Builders are stateless apart from the table they target: ``build()``
    always returns an equivalent statement and never touches the engine.

    Example:
        >>> builder = SnapshotQueryBuilder(NODE)
        >>> statement = builder.build()
        >>> params = builder.build_parameters(datetime(2024, 1, 1))
    """

    def __init__(self, kind: EntityKind, table: Optional[Table] = None):
        """Initialize the builder.

        Args:
            kind: Entity kind whose revision table is queried
            table: Revision table to query. Defaults to the kind's table
                under its default name.
        """
        self.kind = kind
        self.table = table if table is not None else kind.table()

    def build(self) -> Select:
        """Build the snapshot SELECT statement.

        Returns:
            Statement with a single ``snapshot_instant`` DateTime bind
            parameter
        """
        revisions = self.table
        instant = bindparam(SNAPSHOT_INSTANT_PARAM, type_=DateTime())

        current = (
            select(
                revisions.c.id.label("id"),
                func.max(revisions.c.timestamp).label("timestamp"),
            )
            .where(revisions.c.timestamp < instant)
            .group_by(revisions.c.id)
            .subquery("current_revision")
        )

        columns = [revisions.c.id, revisions.c.timestamp]
        columns.extend(revisions.c[name] for name in self.kind.attribute_columns)
        columns.append(revisions.c.tags)

        return (
            select(*columns)
            .select_from(
                revisions.join(
                    current,
                    and_(
                        revisions.c.id == current.c.id,
                        revisions.c.timestamp == current.c.timestamp,
                    ),
                )
            )
            .where(revisions.c.visible == true())
            .order_by(revisions.c.id)
        )

    def build_parameters(self, snapshot_instant: datetime) -> Dict[str, Any]:
        """Bind values for ``build()``, with the instant as naive UTC."""
        return {SNAPSHOT_INSTANT_PARAM: to_storage_timestamp(snapshot_instant)}

    def render(self, dialect: Optional[Dialect] = None) -> str:
        """Render the statement as SQL text for logging and diagnostics."""
        statement = self.build()
        compiled = statement.compile(dialect=dialect) if dialect is not None else statement.compile()
        return str(compiled)
