from pydantic import Field, field_validator
from pydantic_settings import SettingsConfigDict

from snapflow.constants import DEFAULT_FETCH_SIZE, MAX_FETCH_SIZE, EntityType
from .base import SnapflowBaseSettings, validate_sql_identifier


class ReaderSettings(SnapflowBaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SNAPFLOW_READER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    fetch_size: int = Field(
        default=DEFAULT_FETCH_SIZE,
        ge=1,
        le=MAX_FETCH_SIZE,
        description="Rows buffered client-side per round trip while streaming"
    )
    node_table: str = Field(default="nodes", description="Revision table holding nodes")
    segment_table: str = Field(default="segments", description="Revision table holding segments")

    @field_validator("node_table", "segment_table")
    @classmethod
    def validate_table_name(cls, v: str, info) -> str:
        return validate_sql_identifier(v, info.field_name)

    def table_for(self, entity_type: EntityType) -> str:
        """Return the configured table name for an entity kind."""
        if EntityType(entity_type) == EntityType.NODE:
            return self.node_table
        return self.segment_table
