"""Reader-related constants."""

from enum import Enum


class EntityType(str, Enum):
    """Entity kinds that can be read from a revision table."""

    NODE = "node"
    SEGMENT = "segment"


# Identifiers are unsigned 64-bit
MAX_ENTITY_ID = 2 ** 64 - 1

# Rows buffered client-side per fetch round trip
DEFAULT_FETCH_SIZE = 1000
MAX_FETCH_SIZE = 100_000

SNAPSHOT_INSTANT_PARAM = "snapshot_instant"
