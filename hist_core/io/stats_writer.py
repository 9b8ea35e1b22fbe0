"""
Stats writers: the emission side of histogram logging.

A writer receives one HistogramSampleEvent per recorded sample. Validating
metric ids against a catalog, batching and transport all belong to the
writer; failures never propagate back to the recorder.
"""

import logging
import threading
from typing import Iterable, Optional, Set

from hist_core.proto.histogram_sample import HistogramSampleEvent

logger = logging.getLogger(__name__)


class StatsWriter:
    """
    Base class for stats writers.

    Subclasses implement write(). Implementations must be thread-safe and
    must discard events for unrecognized metric ids without raising.
    """

    def write(self, event: HistogramSampleEvent) -> None:
        raise NotImplementedError


class NullStatsWriter(StatsWriter):
    """Discards every event."""

    def write(self, event: HistogramSampleEvent) -> None:
        pass


class LoggingStatsWriter(StatsWriter):
    """
    Writes events to the Python logging system.

    Usage:
        writer = LoggingStatsWriter(known_metric_ids={hash_metric_id('app.latency')})
        writer.write(event)   # logged if the metric is known, dropped otherwise
    """

    def __init__(self, known_metric_ids: Optional[Iterable[int]] = None,
                 level: int = logging.DEBUG):
        """
        Initialize writer.

        Args:
            known_metric_ids: Catalog of accepted metric ids; None accepts all
            level: Log level used for written events
        """
        self.known_metric_ids: Optional[Set[int]] = (
            None if known_metric_ids is None else set(known_metric_ids)
        )
        self.level = level
        self._lock = threading.Lock()
        self._reported_unknown: Set[int] = set()

    def is_known(self, metric_id: int) -> bool:
        """Check whether a metric id is accepted by this writer."""
        return self.known_metric_ids is None or metric_id in self.known_metric_ids

    def write(self, event: HistogramSampleEvent) -> None:
        if not self.is_known(event.metric_id):
            self._note_unknown(event.metric_id)
            return

        if logger.isEnabledFor(self.level):
            if event.uid is None:
                logger.log(
                    self.level,
                    f"{event.atom_id.name} metric_id={event.metric_id} "
                    f"count={event.count} bin={event.bin_index}"
                )
            else:
                logger.log(
                    self.level,
                    f"{event.atom_id.name} metric_id={event.metric_id} "
                    f"uid={event.uid} count={event.count} bin={event.bin_index}"
                )

    def _note_unknown(self, metric_id: int):
        """Log a dropped metric id once."""
        with self._lock:
            if metric_id in self._reported_unknown:
                return
            self._reported_unknown.add(metric_id)
        logger.debug(f"Dropping events for unknown metric id {metric_id}")


# Process-wide default writer
_global_writer: Optional[StatsWriter] = None
_global_writer_lock = threading.Lock()


def get_stats_writer() -> StatsWriter:
    """
    Get the process-wide stats writer.

    Returns:
        The writer set by set_stats_writer(), or a LoggingStatsWriter
    """
    global _global_writer
    with _global_writer_lock:
        if _global_writer is None:
            _global_writer = LoggingStatsWriter()
        return _global_writer


def set_stats_writer(writer: StatsWriter):
    """Replace the process-wide stats writer."""
    global _global_writer
    with _global_writer_lock:
        _global_writer = writer
    logger.info(f"Stats writer set to {type(writer).__name__}")


def reset_stats_writer():
    """Restore the default writer (for testing)."""
    global _global_writer
    with _global_writer_lock:
        _global_writer = None
