"""Query Builder Factory.

Creates snapshot query builders whose table names come from the reader
settings, so callers only name the entity kind.
"""

from typing import TYPE_CHECKING, Optional, Union

from snapflow.constants import EntityType
from snapflow.entities.kinds import EntityKind, get_entity_kind
from snapflow.query_builder.snapshot import SnapshotQueryBuilder

if TYPE_CHECKING:
    from snapflow.settings.main import _Settings


def get_query_builder(
    kind: Union[EntityKind, EntityType, str],
    settings: Optional["_Settings"] = None,
) -> SnapshotQueryBuilder:
    """Create a snapshot query builder configured from settings.

    Args:
        kind: Entity kind, enum member or kind name
        settings: Settings to read table names from. Defaults to the
            application settings singleton.

    Returns:
        Builder targeting the configured revision table

    Raises:
        ValueError: If the kind is unknown

    Example:
        >>> builder = get_query_builder("node")
        >>> builder.table.name
        'nodes'
    """
    if settings is None:
        from snapflow.settings import get_settings
        settings = get_settings()

    entity_kind = get_entity_kind(kind)
    table_name = settings.reader.table_for(entity_kind.entity_type)
    return SnapshotQueryBuilder(entity_kind, entity_kind.table(table_name))
