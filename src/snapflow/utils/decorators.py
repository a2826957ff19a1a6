"""Span instrumentation for storage engine calls."""

import functools
from typing import Any, Callable, Dict, Optional, TypeVar

from opentelemetry.trace import SpanKind, Status, StatusCode

from snapflow.logging import get_logger
from snapflow.telemetry import get_tracer

F = TypeVar('F', bound=Callable[..., Any])

AttributeGetter = Callable[..., Dict[str, Any]]

logger = get_logger(__name__)


def traced(
    span_name: str,
    *,
    kind: SpanKind = SpanKind.CLIENT,
    attribute_getter: Optional[AttributeGetter] = None,
) -> Callable[[F], F]:
    """Run the decorated call inside an OpenTelemetry span.

    The span records the exception and an ERROR status when the call
    raises. Attributes whose value is None are not set.

    Args:
        span_name: Name of the span, e.g. ``snapflow.cursor.open``
        kind: Span kind. Storage engine round trips are CLIENT spans.
        attribute_getter: Called with the decorated function's arguments
            to produce span attributes
    """

    def decorator(func: F) -> F:
        tracer = get_tracer(func.__module__)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            with tracer.start_as_current_span(span_name, kind=kind, record_exception=False) as span:
                if attribute_getter is not None:
                    for key, value in attribute_getter(*args, **kwargs).items():
                        if value is not None:
                            span.set_attribute(key, value)

                try:
                    return func(*args, **kwargs)
                except Exception as exc:
                    span.record_exception(exc)
                    span.set_status(Status(StatusCode.ERROR, str(exc)))
                    logger.debug("Span %s failed", span_name, extra={"error_type": type(exc).__name__})
                    raise

        return wrapper  # type: ignore[return-value]

    return decorator
