from typing import Any, Dict, Optional

from pydantic import Field, SecretStr
from pydantic_settings import SettingsConfigDict
from sqlalchemy.engine import URL, make_url

from .base import SnapflowBaseSettings


class DatabaseSettings(SnapflowBaseSettings):
    """Connection settings for the storage engine holding revision tables.

    Either ``url`` is given as a complete SQLAlchemy URL, or the URL is
    assembled from ``drivername`` and the individual connection fields.
    """

    model_config = SettingsConfigDict(
        env_prefix="SNAPFLOW_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    url: Optional[SecretStr] = Field(
        default=None,
        description="Complete SQLAlchemy URL. Takes precedence over the individual fields."
    )
    drivername: str = Field(
        default="mysql+pymysql",
        description="SQLAlchemy dialect and DBAPI driver (e.g. mysql+pymysql, postgresql+psycopg)"
    )
    host: str = Field(default="localhost", description="Server hosting the database")
    port: Optional[int] = Field(default=None, ge=1, le=65535)
    database: Optional[str] = Field(default=None, description="Database instance name")
    user: Optional[str] = Field(default=None, description="User name for authentication")
    password: Optional[SecretStr] = Field(default=None, description="Password for authentication")

    pool_size: int = Field(default=5, ge=1, le=100)
    max_overflow: int = Field(default=10, ge=0)
    pool_timeout: int = Field(default=30, ge=1)
    connect_timeout: Optional[int] = Field(
        default=None,
        ge=1,
        description="Seconds to wait for a connection, passed to the DBAPI driver"
    )
    echo: bool = Field(default=False, description="Log every SQL statement")

    @property
    def is_configured(self) -> bool:
        """Check whether enough is set to build a connection URL."""
        return self.url is not None or bool(self.database)

    def get_connection_url(self) -> Optional[URL]:
        """Build the SQLAlchemy URL for this database.

        Returns:
            The URL, or None when neither ``url`` nor ``database`` is set
        """
        if self.url is not None:
            return make_url(self.url.get_secret_value())

        if not self.database:
            return None

        return URL.create(
            drivername=self.drivername,
            username=self.user,
            password=self.password.get_secret_value() if self.password else None,
            host=self.host,
            port=self.port,
            database=self.database,
        )

    def get_connect_args(self) -> Dict[str, Any]:
        """DBAPI connect arguments derived from these settings."""
        connect_args: Dict[str, Any] = {}
        if self.connect_timeout is not None:
            connect_args["connect_timeout"] = self.connect_timeout
        return connect_args
