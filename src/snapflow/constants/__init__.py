"""Constants module for snapflow.

This module contains constant values and enumerations used throughout
snapflow. It has no dependencies on other snapflow modules.
"""

from snapflow.constants.reader import (
    DEFAULT_FETCH_SIZE,
    MAX_ENTITY_ID,
    MAX_FETCH_SIZE,
    SNAPSHOT_INSTANT_PARAM,
    EntityType,
)

__all__ = [
    "DEFAULT_FETCH_SIZE",
    "MAX_ENTITY_ID",
    "MAX_FETCH_SIZE",
    "SNAPSHOT_INSTANT_PARAM",
    "EntityType",
]
