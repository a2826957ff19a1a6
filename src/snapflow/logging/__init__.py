"""Logging infrastructure for snapflow.

This module provides structured logging with JSON output and context
tracking for read passes.
"""

from snapflow.logging.filters import ContextFilter
from snapflow.logging.logger import CustomJsonFormatter, get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
    "CustomJsonFormatter",
    "ContextFilter",
]
