import re
from typing import Any

from pydantic_settings import BaseSettings, SettingsConfigDict


_SQL_IDENTIFIER = re.compile(r'^[a-zA-Z_][a-zA-Z0-9_$#@]*$')


def validate_sql_identifier(value: str, field_name: str) -> str:
    """Validate an SQL identifier taken from configuration.

    Args:
        value: Identifier to check
        field_name: Setting name used in the error message

    Returns:
        The identifier unchanged

    Raises:
        ValueError: If the identifier is empty, too long or contains
            characters outside the allowed set
    """
    if not value:
        raise ValueError(f"{field_name} cannot be empty")

    if not _SQL_IDENTIFIER.match(value):
        raise ValueError(
            f"Invalid {field_name}: '{value}'. "
            f"Must start with letter or underscore, and contain only alphanumeric, underscore, $, #, or @ characters."
        )

    if len(value) > 128:
        raise ValueError(f"{field_name} too long: maximum 128 characters")

    return value


class SnapflowBaseSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__"
    )

    @classmethod
    def get_env_prefix(cls) -> str:
        """Get the environment variable prefix for this settings class.

        Returns:
            str: Environment variable prefix (empty string for base class)
        """
        return cls.model_config.get("env_prefix", "")

    def model_post_init(self, __context: Any) -> None:
        """Post initialization hook for additional setup.

        Subclasses override this and call super() to add checks that
        span several fields.
        """
        super().model_post_init(__context)
