"""
Histogram metric logging wrapper.

Binds a metric name to bin options and turns every recorded sample into a
single count increment for the bin the sample falls into.

Flow:
    Histogram.record_sample(value)
        -> options.bucket_for(value)
        -> StatsWriter.write(HistogramSampleEvent(metric_id, 1, bin))
"""

import logging
from typing import Iterable, Optional

from hist_core.binning import BinOptions
from hist_core.io.stats_writer import StatsWriter, get_stats_writer
from hist_core.proto.histogram_sample import AtomId, HistogramSampleEvent
from .hashing import hash_metric_id

logger = logging.getLogger(__name__)


class Histogram:
    """
    Histogram metric recorder.

    Holds no mutable state; record_sample() may be called concurrently from
    any number of threads.

    Usage:
        histogram = Histogram('app.latency_ms',
                              UniformOptions(bin_count=50, min_value=0, exclusive_max_value=500))
        histogram.record_sample(12.5)
    """

    def __init__(self, metric_name: str, options: BinOptions,
                 writer: Optional[StatsWriter] = None):
        """
        Create histogram recorder.

        Args:
            metric_name: Metric to log; events for a name the stats writer
                does not know are dropped by the writer
            options: Bin options used to map samples to bins
            writer: Stats writer; the process-wide writer is used if None
        """
        self._metric_name = metric_name
        self._metric_id = hash_metric_id(metric_name)
        self._options = options
        self._writer = writer

        logger.debug(
            f"Histogram '{metric_name}' created: id={self._metric_id}, "
            f"bins={options.bin_count()}"
        )

    @property
    def metric_name(self) -> str:
        return self._metric_name

    @property
    def metric_id(self) -> int:
        return self._metric_id

    @property
    def options(self) -> BinOptions:
        return self._options

    def record_sample(self, sample: float) -> None:
        """
        Log a count increment for the bin the sample falls into.

        Args:
            sample: Sample value
        """
        bin_index = self._options.bucket_for(sample)
        self._write(HistogramSampleEvent(
            atom_id=AtomId.EXPRESS_HISTOGRAM_SAMPLE_REPORTED,
            metric_id=self._metric_id,
            count=1,
            bin_index=bin_index,
        ))

    def record_sample_with_uid(self, uid: int, sample: float) -> None:
        """
        Log a count increment attributed to a uid.

        Args:
            uid: Uid the sample is attributed to
            sample: Sample value
        """
        bin_index = self._options.bucket_for(sample)
        self._write(HistogramSampleEvent(
            atom_id=AtomId.EXPRESS_UID_HISTOGRAM_SAMPLE_REPORTED,
            metric_id=self._metric_id,
            count=1,
            bin_index=bin_index,
            uid=uid,
        ))

    def record_samples(self, samples: Iterable[float]) -> None:
        """Record each sample in order, one event per sample."""
        for sample in samples:
            self.record_sample(sample)

    def _write(self, event: HistogramSampleEvent):
        writer = self._writer if self._writer is not None else get_stats_writer()
        writer.write(event)

    def __repr__(self) -> str:
        return f"Histogram({self._metric_name!r}, {self._options!r})"
