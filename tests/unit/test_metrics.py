from unittest.mock import MagicMock

from snapflow.monitoring import ReaderMetrics, ReadStatistics


def test_statistics_duration_and_dict():
    statistics = ReadStatistics(entity_kind="node", rows_read=4, entities_emitted=3, duplicates_suppressed=1)
    assert statistics.duration_seconds is None

    statistics.start()
    statistics.finish()

    data = statistics.to_dict()
    assert data["rows_read"] == 4
    assert data["duration_seconds"] >= 0
    assert "started_at" not in data


def test_record_pass_adds_counts_per_kind():
    metrics = ReaderMetrics()
    counters = {name: MagicMock() for name in metrics._instruments}
    metrics._instruments = counters

    metrics.record_pass(ReadStatistics(entity_kind="segment", rows_read=5, entities_emitted=4, duplicates_suppressed=1))
    metrics.record_failure("segment", ValueError("x"))

    counters["rows_read"].add.assert_called_once_with(5, {"entity_kind": "segment"})
    counters["duplicates_suppressed"].add.assert_called_once_with(1, {"entity_kind": "segment"})
    counters["read_failures"].add.assert_called_once_with(1, {"entity_kind": "segment", "error_type": "ValueError"})
