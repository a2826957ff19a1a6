from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Dict, Iterator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from snapflow.common.exceptions import configuration_error, connection_error
from snapflow.logging import get_logger

if TYPE_CHECKING:
    from snapflow.settings import DatabaseSettings

logger = get_logger(__name__)


class SQLEngine:
    """SQLAlchemy-based access to the storage engine holding revision tables.

    The engine is either built lazily from ``DatabaseSettings`` or supplied
    ready-made by the caller, who then owns its authentication and
    lifetime. Statements are never retried here: a failed read pass is
    reported to the caller, who decides whether to start a new one.

    Platform Customization:
        Subclasses can override ``_apply_connection_settings()`` to run
        dialect-specific statements on every acquired connection.

    Example:
        >>> engine = SQLEngine(settings=get_settings().database)
        >>> with engine.connect() as conn:
        ...     conn.execute(text("SELECT 1"))
        >>>
        >>> # Or wrap an existing SQLAlchemy engine
        >>> engine = SQLEngine(engine=create_engine("sqlite:///snapshot.db"))
    """

    def __init__(
        self,
        settings: Optional['DatabaseSettings'] = None,
        engine: Optional[Engine] = None,
    ):
        """Initialize SQL engine.

        Args:
            settings: Database settings used to build the engine
            engine: Pre-built SQLAlchemy engine, used as-is

        Raises:
            ConfigurationError: If neither settings nor engine is given
        """
        if settings is None and engine is None:
            raise configuration_error("SQLEngine requires database settings or an engine")

        self.settings = settings
        self._engine: Optional[Engine] = engine
        self._owns_engine = engine is None
        self._connection_info: Dict[str, Any] = {}
        if engine is not None:
            self._connection_info.update(self._describe(engine))

    @property
    def engine(self) -> Engine:
        """Get or create SQLAlchemy engine with lazy initialization."""
        if self._engine is None:
            self._engine = self._create_engine()
        return self._engine

    @property
    def dialect_name(self) -> str:
        return self.engine.dialect.name

    @staticmethod
    def _describe(engine: Engine) -> Dict[str, Any]:
        url = engine.url
        return {
            "dialect": engine.dialect.name,
            "host": url.host,
            "database": url.database,
        }

    def _create_engine(self) -> Engine:
        """Create SQLAlchemy engine with connection pooling.

        Raises:
            ConfigurationError: If no connection URL can be built
            ConnectivityError: If engine creation fails
        """
        settings = self.settings
        url = settings.get_connection_url()
        if url is None:
            raise configuration_error(
                "No database configured: set SNAPFLOW_DB_URL or SNAPFLOW_DB_DATABASE",
                config_key="database",
            )

        engine_kwargs: Dict[str, Any] = {
            "pool_pre_ping": True,  # Verify connections before use
            "echo": settings.echo,
        }
        if url.get_backend_name() != "sqlite":
            engine_kwargs.update(
                pool_size=settings.pool_size,
                max_overflow=settings.max_overflow,
                pool_timeout=settings.pool_timeout,
            )
        connect_args = settings.get_connect_args()
        if connect_args:
            engine_kwargs["connect_args"] = connect_args

        try:
            engine = create_engine(url, **engine_kwargs)
        except Exception as e:
            raise connection_error(
                f"Failed to create engine for {url.get_backend_name()}",
                service=url.get_backend_name(),
                host=url.host,
                cause=e,
            )

        self._connection_info.update(self._describe(engine))
        logger.info(
            "Created SQL engine",
            extra={"db.dialect": engine.dialect.name, "db.host": url.host, "db.name": url.database},
        )
        return engine

    @contextmanager
    def connect(self) -> Iterator[Connection]:
        """Acquire a connection from the pool, released when the block exits.

        Yields:
            Connection with platform-specific settings applied

        Raises:
            ConnectivityError: If no connection can be acquired
        """
        try:
            conn = self.engine.connect()
        except SQLAlchemyError as e:
            raise connection_error(
                "Unable to connect to the storage engine",
                service=self._connection_info.get("dialect"),
                host=self._connection_info.get("host"),
                cause=e,
            )
        try:
            self._apply_connection_settings(conn)
            yield conn
        finally:
            conn.close()

    def _apply_connection_settings(self, conn: Connection) -> None:
        """Apply platform-specific connection settings.

        Override this method in subclasses to run SET commands or other
        per-connection configuration.

        Args:
            conn: SQLAlchemy Connection object
        """
        pass

    def test_connection(self) -> bool:
        """Test if connection to the engine is working.

        Returns:
            True if connection is successful, False otherwise
        """
        try:
            with self.connect() as conn:
                return conn.execute(text("SELECT 1")).scalar_one() == 1
        except Exception as exc:
            logger.error(
                "SQL connection test failed",
                extra={"db.dialect": self._connection_info.get("dialect"), "error": str(exc)},
                exc_info=True,
            )
            return False

    def get_connection_info(self) -> Dict[str, Any]:
        """Get connection information for debugging/logging."""
        return self._connection_info.copy()

    def dispose(self) -> None:
        """Release pooled connections of an engine this instance created."""
        if self._engine is not None and self._owns_engine:
            self._engine.dispose()
            self._engine = None
