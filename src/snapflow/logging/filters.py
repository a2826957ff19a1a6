"""Logging filters for context injection.

This module provides filters that inject context variables into log records,
so every line logged during a read pass carries the snapshot it belongs to.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Any, Dict, Iterator, List, Optional, Tuple

from snapflow.__version__ import __version__

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
snapshot_instant_var: ContextVar[Optional[str]] = ContextVar("snapshot_instant", default=None)
entity_kind_var: ContextVar[Optional[str]] = ContextVar("entity_kind", default=None)

_static_environment: Optional[str] = None
_static_extra: Dict[str, Any] = {}


class ContextFilter(logging.Filter):
    """Logging filter that adds context variables to log records.

    Static context (deployment environment and arbitrary extra fields) is
    only attached when configured through ``set_logging_context``.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Add context variables to the log record.

        Args:
            record: Log record to enhance

        Returns:
            Always True (doesn't filter out any records)
        """
        setattr(record, "request_id", request_id_var.get())
        setattr(record, "snapshot_instant", snapshot_instant_var.get())
        setattr(record, "entity_kind", entity_kind_var.get())
        setattr(record, "sdk_name", "snapflow")
        setattr(record, "snapflow_version", __version__)

        if _static_environment is not None:
            setattr(record, "environment", _static_environment)
        for key, value in _static_extra.items():
            setattr(record, key, value)

        return True


def set_logging_context(
    environment: Optional[str] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> None:
    """Set static context attached to every record."""
    global _static_environment, _static_extra
    _static_environment = environment
    _static_extra = dict(extra or {})


@contextmanager
def request_context(
    request_id: Optional[str] = None,
    snapshot_instant: Optional[str] = None,
    entity_kind: Optional[str] = None,
) -> Iterator[None]:
    """Stamp records logged inside the block with the given context.

    Values are reset to what they were on entry when the block exits. A
    block must not span a generator yield, or the caller would run with
    the generator's context.
    """
    tokens: List[Tuple[ContextVar, Token]] = []
    for var, value in (
        (request_id_var, request_id),
        (snapshot_instant_var, snapshot_instant),
        (entity_kind_var, entity_kind),
    ):
        if value is not None:
            tokens.append((var, var.set(value)))
    try:
        yield
    finally:
        for var, token in reversed(tokens):
            var.reset(token)
