"""Metrics collection for snapshot reads.

``ReadStatistics`` holds the counts of one read pass. ``ReaderMetrics``
mirrors them to OpenTelemetry counters, which are no-ops unless an SDK
meter provider is configured.
"""

import time
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

from snapflow.__version__ import __version__
from snapflow.telemetry import get_meter


@dataclass
class ReadStatistics:
    """Counts for a single read pass.

    Attributes:
        entity_kind: Kind of entity read
        rows_read: Rows pulled from the cursor
        entities_emitted: Entities handed to the caller
        duplicates_suppressed: Exact duplicate rows dropped
        started_at: Monotonic clock value when the pass began
        finished_at: Monotonic clock value when the pass ended
    """

    entity_kind: str
    rows_read: int = 0
    entities_emitted: int = 0
    duplicates_suppressed: int = 0
    started_at: Optional[float] = None
    finished_at: Optional[float] = None

    def start(self) -> None:
        self.started_at = time.monotonic()

    def finish(self) -> None:
        self.finished_at = time.monotonic()

    @property
    def duration_seconds(self) -> Optional[float]:
        if self.started_at is None:
            return None
        end = self.finished_at if self.finished_at is not None else time.monotonic()
        return end - self.started_at

    def to_dict(self) -> Dict[str, Any]:
        """Convert statistics to a dictionary suitable for log extras."""
        data = asdict(self)
        data.pop("started_at")
        data.pop("finished_at")
        data["duration_seconds"] = self.duration_seconds
        return data


@dataclass
class ReaderMetrics:
    """OpenTelemetry instruments shared by all readers."""

    meter_name: str = "snapflow"
    _instruments: Dict[str, Any] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        meter = get_meter(self.meter_name, __version__)
        self._instruments = {
            "rows_read": meter.create_counter(
                "snapflow_rows_read_total",
                description="Rows pulled from snapshot cursors",
                unit="rows",
            ),
            "entities_emitted": meter.create_counter(
                "snapflow_entities_emitted_total",
                description="Entities emitted by snapshot readers",
                unit="entities",
            ),
            "duplicates_suppressed": meter.create_counter(
                "snapflow_duplicates_suppressed_total",
                description="Exact duplicate rows dropped by snapshot readers",
                unit="rows",
            ),
            "read_failures": meter.create_counter(
                "snapflow_read_failures_total",
                description="Read passes aborted by an error",
                unit="passes",
            ),
        }

    def record_pass(self, statistics: ReadStatistics) -> None:
        attributes = {"entity_kind": statistics.entity_kind}
        self._instruments["rows_read"].add(statistics.rows_read, attributes)
        self._instruments["entities_emitted"].add(statistics.entities_emitted, attributes)
        self._instruments["duplicates_suppressed"].add(statistics.duplicates_suppressed, attributes)

    def record_failure(self, entity_kind: str, error: Exception) -> None:
        self._instruments["read_failures"].add(
            1, {"entity_kind": entity_kind, "error_type": type(error).__name__}
        )


_metrics: Optional[ReaderMetrics] = None


def get_reader_metrics() -> ReaderMetrics:
    """Return the process-wide reader metrics instance."""
    global _metrics
    if _metrics is None:
        _metrics = ReaderMetrics()
    return _metrics
