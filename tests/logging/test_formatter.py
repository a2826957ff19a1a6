import json
import logging
import sys

from opentelemetry import trace
from opentelemetry.trace import NonRecordingSpan, SpanContext, TraceFlags

from snapflow.logging import CustomJsonFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="snapflow.reader",
        level=logging.WARNING,
        pathname=__file__,
        lineno=3,
        msg="read %s rows",
        args=(3,),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_emits_json_with_extras():
    payload = json.loads(CustomJsonFormatter().format(_record(entity_kind="segment", rows_read=3)))

    assert payload["message"] == "read 3 rows"
    assert payload["level"] == "WARNING"
    assert payload["logger"] == "snapflow.reader"
    assert payload["entity_kind"] == "segment"
    assert payload["rows_read"] == 3
    assert "msg" not in payload
    assert "trace_id" not in payload


def test_formatter_includes_exception():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = _record()
        record.exc_info = sys.exc_info()

    payload = json.loads(CustomJsonFormatter().format(record))

    assert "RuntimeError: boom" in payload["exception"]


def test_setup_logging_installs_json_handler():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging("debug")
        assert root.level == logging.DEBUG
        handler = root.handlers[-1]
        assert isinstance(handler.formatter, CustomJsonFormatter)
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_formatter_adds_active_span_ids():
    span = NonRecordingSpan(
        SpanContext(
            trace_id=0x4BF92F3577B34DA6A3CE929D0E0E4736,
            span_id=0x00F067AA0BA902B7,
            is_remote=False,
            trace_flags=TraceFlags(TraceFlags.SAMPLED),
        )
    )

    with trace.use_span(span):
        payload = json.loads(CustomJsonFormatter().format(_record()))

    assert payload["trace_id"] == "4bf92f3577b34da6a3ce929d0e0e4736"
    assert payload["span_id"] == "00f067aa0ba902b7"
