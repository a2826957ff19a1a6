"""Common exceptions for snapflow.

Exception Design:
    Every failure carries an ``ErrorCode``. All exceptions inherit from
    ``SnapflowError`` and log themselves with structured details when
    created. Every error raised during a read pass is fatal to that pass;
    nothing here is retried.
"""

from snapflow.common.exceptions import (
    SnapflowError,
    ErrorCode,
    ConfigurationError,
    ConnectivityError,
    QueryExecutionError,
    MalformedRowError,
    OrderingViolationError,
    MultipleRevisionsError,
    ReaderStateError,
    # Helper functions
    configuration_error,
    connection_error,
    query_execution_error,
    malformed_row_error,
)

__all__ = [
    # Base Exception and Error Codes
    "SnapflowError",
    "ErrorCode",
    # Failure kinds
    "ConfigurationError",
    "ConnectivityError",
    "QueryExecutionError",
    "MalformedRowError",
    "OrderingViolationError",
    "MultipleRevisionsError",
    "ReaderStateError",
    # Helper functions
    "configuration_error",
    "connection_error",
    "query_execution_error",
    "malformed_row_error",
]
