from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Standard error codes for snapflow operations.

    Error codes categorize failures without requiring a deep exception
    hierarchy. Each category has its own prefix for easy identification.

    Attributes:
        CONFIG_*: Configuration-related errors
        CONNECTION_*: Storage engine connectivity errors
        EXECUTION_*: Query execution and reader lifecycle errors
        DATA_*: Row shape and stream invariant errors
    """
    # Configuration errors
    CONFIG_ERROR = "CONFIG_001"

    # Connection errors
    CONNECTION_ERROR = "CONNECTION_001"

    # Execution errors
    EXECUTION_ERROR = "EXECUTION_001"
    QUERY_EXECUTION_ERROR = "EXECUTION_002"
    READER_CONSUMED = "EXECUTION_006"

    # Data errors
    MALFORMED_ROW = "DATA_004"
    ORDERING_VIOLATION = "DATA_005"
    MULTIPLE_REVISIONS = "DATA_006"


class SnapflowError(Exception):
    """Base exception for all snapflow errors.

    Errors are categorized by error code. The dedicated subclasses below
    exist so callers can catch one failure kind of a read pass without
    inspecting codes.

    Attributes:
        message: Error message
        error_code: Error code from ErrorCode enum
        details: Additional error details
        cause: Optional underlying exception
        is_retryable: Whether the error is transient and can be retried
    """

    default_error_code: ErrorCode = ErrorCode.EXECUTION_ERROR

    def __init__(
        self,
        message: str,
        error_code: Optional[ErrorCode] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        is_retryable: bool = False
    ):
        """Initialize snapflow error.

        Args:
            message: Error message
            error_code: Error code, defaults to the class default
            details: Additional error details
            cause: Optional underlying exception
            is_retryable: Whether error is transient
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        self.cause = cause
        self.is_retryable = is_retryable

        # Lazy import to avoid circular dependency
        from snapflow.logging import get_logger
        logger = get_logger(__name__)
        logger.error(
            message,
            extra={
                "error_code": self.error_code.value,
                "details": self.details,
                "is_retryable": is_retryable,
            },
            exc_info=cause is not None
        )

    def __str__(self) -> str:
        """String representation of the error."""
        msg = f"[{self.error_code.value}] {self.message}"
        if self.cause:
            msg = f"{msg} (caused by: {type(self.cause).__name__}: {str(self.cause)})"
        return msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "error_name": self.error_code.name,
            "details": self.details,
            "is_retryable": self.is_retryable
        }


class ConfigurationError(SnapflowError):
    """Settings are missing or cannot be turned into an engine."""

    default_error_code = ErrorCode.CONFIG_ERROR


class ConnectivityError(SnapflowError):
    """The storage engine cannot be reached or the session was lost."""

    default_error_code = ErrorCode.CONNECTION_ERROR


class QueryExecutionError(SnapflowError):
    """The storage engine rejected the statement or failed while fetching."""

    default_error_code = ErrorCode.QUERY_EXECUTION_ERROR


class MalformedRowError(SnapflowError):
    """A row does not match the schema expected for its entity kind."""

    default_error_code = ErrorCode.MALFORMED_ROW


class OrderingViolationError(SnapflowError):
    """The stream produced an identifier lower than its predecessor."""

    default_error_code = ErrorCode.ORDERING_VIOLATION


class MultipleRevisionsError(SnapflowError):
    """One identifier surfaced with two different current revisions."""

    default_error_code = ErrorCode.MULTIPLE_REVISIONS


class ReaderStateError(SnapflowError):
    """A single-pass reader was iterated again."""

    default_error_code = ErrorCode.READER_CONSUMED


def _truncate_query(query: str) -> str:
    # First 500 chars carry the SELECT and FROM parts
    return query[:500] + "..." if len(query) > 500 else query


# Helper functions for common error scenarios
def configuration_error(
    message: str,
    config_key: Optional[str] = None,
    **kwargs
) -> ConfigurationError:
    """Create a configuration error.

    Args:
        message: Error message
        config_key: Configuration key that caused the error
        **kwargs: Additional error details

    Returns:
        ConfigurationError with CONFIG_ERROR code
    """
    details = kwargs.get('details', {})
    if config_key:
        details["config_key"] = config_key

    return ConfigurationError(
        message=message,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def connection_error(
    message: str,
    service: Optional[str] = None,
    host: Optional[str] = None,
    **kwargs
) -> ConnectivityError:
    """Create a connection error.

    Args:
        message: Error message
        service: Service that failed to connect
        host: Host/endpoint that failed
        **kwargs: Additional error details

    Returns:
        ConnectivityError with CONNECTION_ERROR code
    """
    details = kwargs.get('details', {})
    if service:
        details["service"] = service
    if host:
        details["host"] = host

    return ConnectivityError(
        message=message,
        details=details,
        **{k: v for k, v in kwargs.items() if k != 'details'}
    )


def query_execution_error(
    query: str,
    original_error: Exception,
    **kwargs
) -> QueryExecutionError:
    """Create a query execution error.

    Args:
        query: SQL query that failed
        original_error: The underlying exception
        **kwargs: Additional error details

    Returns:
        QueryExecutionError with QUERY_EXECUTION_ERROR code
    """
    details = kwargs.get('details', {})
    details["query"] = _truncate_query(query)

    return QueryExecutionError(
        message=f"Query execution failed: {str(original_error)}",
        details=details,
        cause=original_error,
        **{k: v for k, v in kwargs.items() if k not in ['details', 'cause']}
    )


def malformed_row_error(
    kind: str,
    column: Optional[str] = None,
    original_error: Optional[Exception] = None,
    **kwargs
) -> MalformedRowError:
    """Create a malformed row error.

    Args:
        kind: Entity kind being decoded
        column: Column that was missing or invalid, when known
        original_error: The underlying row-access or validation failure
        **kwargs: Additional error details

    Returns:
        MalformedRowError with MALFORMED_ROW code
    """
    details = kwargs.get('details', {})
    details["kind"] = kind
    if column:
        details["column"] = column

    message = f"Unable to read {kind} fields"
    if column:
        message = f"{message}: column '{column}' is missing or invalid"

    return MalformedRowError(
        message=message,
        details=details,
        cause=original_error,
        **{k: v for k, v in kwargs.items() if k not in ['details', 'cause']}
    )
