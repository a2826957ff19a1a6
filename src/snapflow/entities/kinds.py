"""Entity kind descriptors.

A kind ties an entity model to the revision table it is read from and
says which table columns feed which model attributes. Readers and
decoders are generic over kinds.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, Mapping, Optional, Type

from sqlalchemy import MetaData, Table

from snapflow.constants import EntityType
from snapflow.entities.models import Entity, Node, Segment
from snapflow.schema import node_table, segment_table


@dataclass(frozen=True)
class EntityKind:
    """Everything needed to read one kind of entity.

    Attributes:
        entity_type: Kind identifier
        model: Entity model class built for every accepted row
        attribute_columns: Kind-specific column name -> model field name
        table_factory: Builds the revision table, given metadata and a name
        default_table: Table name used when none is configured
    """

    entity_type: EntityType
    model: Type[Entity]
    attribute_columns: Mapping[str, str]
    table_factory: Callable[[Optional[MetaData], str], Table] = field(repr=False)
    default_table: str

    @property
    def name(self) -> str:
        return EntityType(self.entity_type).value

    def table(self, name: Optional[str] = None, metadata: Optional[MetaData] = None) -> Table:
        """Build this kind's revision table."""
        return self.table_factory(metadata, name or self.default_table)


NODE = EntityKind(
    entity_type=EntityType.NODE,
    model=Node,
    attribute_columns={"latitude": "latitude", "longitude": "longitude"},
    table_factory=node_table,
    default_table="nodes",
)

SEGMENT = EntityKind(
    entity_type=EntityType.SEGMENT,
    model=Segment,
    attribute_columns={"node_a": "node_id_from", "node_b": "node_id_to"},
    table_factory=segment_table,
    default_table="segments",
)

_KINDS: Dict[EntityType, EntityKind] = {
    EntityType.NODE: NODE,
    EntityType.SEGMENT: SEGMENT,
}


def get_entity_kind(kind) -> EntityKind:
    """Resolve an entity kind from a descriptor, enum member or name.

    Raises:
        ValueError: If the name does not match a known kind
    """
    if isinstance(kind, EntityKind):
        return kind
    try:
        return _KINDS[EntityType(kind)]
    except ValueError:
        known = ", ".join(t.value for t in _KINDS)
        raise ValueError(f"Unknown entity kind '{kind}'. Known kinds: {known}") from None
