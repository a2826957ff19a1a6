"""Read statistics and OpenTelemetry metrics."""

from snapflow.monitoring.metrics import ReaderMetrics, ReadStatistics, get_reader_metrics

__all__ = [
    "ReadStatistics",
    "ReaderMetrics",
    "get_reader_metrics",
]
