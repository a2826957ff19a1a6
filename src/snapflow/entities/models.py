"""Entity models produced by snapshot readers.

An entity is one revision of a logical record: its identifier, the
timestamp of the revision and its tags, plus the attributes specific to
its kind.
"""

from datetime import datetime
from typing import ClassVar, Dict

from pydantic import Field, field_validator

from snapflow.constants import MAX_ENTITY_ID, EntityType
from snapflow.types.base import SnapflowBaseModel
from snapflow.utils.datetime import to_utc


class Entity(SnapflowBaseModel):
    """Common fields of every revisioned entity.

    Attributes:
        id: Unsigned 64-bit identifier, unique per logical entity
        timestamp: Revision timestamp, always timezone-aware UTC
        tags: Attribute mapping in source order
    """

    entity_type: ClassVar[EntityType]

    id: int = Field(..., ge=0, le=MAX_ENTITY_ID, strict=True)
    timestamp: datetime
    tags: Dict[str, str] = Field(default_factory=dict)

    @field_validator("timestamp")
    @classmethod
    def normalize_timestamp(cls, v: datetime) -> datetime:
        return to_utc(v)


class Node(Entity):
    """A point located by latitude and longitude."""

    entity_type: ClassVar[EntityType] = EntityType.NODE

    latitude: float
    longitude: float


class Segment(Entity):
    """A directed link between two nodes."""

    entity_type: ClassVar[EntityType] = EntityType.SEGMENT

    node_id_from: int = Field(..., ge=0, le=MAX_ENTITY_ID, strict=True)
    node_id_to: int = Field(..., ge=0, le=MAX_ENTITY_ID, strict=True)
