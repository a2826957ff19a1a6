import logging

from snapflow.logging.filters import (
    ContextFilter,
    entity_kind_var,
    request_context,
    set_logging_context,
)


def _record() -> logging.LogRecord:
    return logging.LogRecord(
        name="test.logger",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="sample",
        args=(),
        exc_info=None,
    )


def test_context_filter_respects_static_environment():
    set_logging_context(environment="qa", extra={"region": "eu-west"})
    try:
        record = _record()
        assert ContextFilter().filter(record)
        assert getattr(record, "environment") == "qa"
        assert getattr(record, "region") == "eu-west"
    finally:
        set_logging_context(environment=None, extra=None)


def test_context_filter_uses_request_context():
    with request_context(request_id="req-1", snapshot_instant="2024-01-01T00:00:00+00:00", entity_kind="node"):
        record = _record()
        assert ContextFilter().filter(record)
        assert record.request_id == "req-1"
        assert record.snapshot_instant == "2024-01-01T00:00:00+00:00"
        assert record.entity_kind == "node"
        assert record.sdk_name == "snapflow"


def test_context_filter_no_config_is_graceful():
    set_logging_context(environment=None, extra=None)
    record = _record()
    assert ContextFilter().filter(record)
    assert not hasattr(record, "environment")
    assert record.entity_kind is None


def test_request_context_restores_outer_values():
    with request_context(entity_kind="node"):
        with request_context(entity_kind="segment", request_id="inner"):
            assert entity_kind_var.get() == "segment"
        assert entity_kind_var.get() == "node"
    assert entity_kind_var.get() is None


def test_request_context_resets_on_error():
    try:
        with request_context(entity_kind="node"):
            raise RuntimeError("boom")
    except RuntimeError:
        pass
    assert entity_kind_var.get() is None
