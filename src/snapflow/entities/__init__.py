"""Entity models and the kinds that describe how to read them."""

from snapflow.entities.models import Entity, Node, Segment
from snapflow.entities.kinds import NODE, SEGMENT, EntityKind, get_entity_kind

__all__ = [
    "Entity",
    "Node",
    "Segment",
    "EntityKind",
    "NODE",
    "SEGMENT",
    "get_entity_kind",
]
