"""
Unit tests for the Histogram recorder.

Tests cover:
- One event per recorded sample with (metric id, count=1, bin)
- Uid attributed samples
- Process-wide writer fallback
- Concurrent recording
"""

import math
import threading

import pytest

from hist_core.binning import InvalidConfigurationError, ScaledRangeOptions, UniformOptions
from hist_core.binning.base import MAX_BIN_COUNT
from hist_core.io import NullStatsWriter, set_stats_writer
from hist_core.metrics import Histogram, hash_metric_id
from hist_core.proto import AtomId

from tests.conftest import CapturingStatsWriter


class TestRecordSample:
    """Tests for record_sample."""

    def test_single_sample_emits_once(self, test_histogram, capturing_writer):
        """Test the reference side effect for 5.5 on the ten-bin histogram."""
        result = test_histogram.record_sample(5.5)

        assert result is None
        assert len(capturing_writer.events) == 1
        assert capturing_writer.tuples == [(hash_metric_id("test.metric"), 1, 6)]

    def test_event_fields(self, test_histogram, capturing_writer):
        test_histogram.record_sample(0.0)

        event = capturing_writer.events[0]
        assert event.atom_id == AtomId.EXPRESS_HISTOGRAM_SAMPLE_REPORTED
        assert event.metric_id == test_histogram.metric_id
        assert event.count == 1
        assert event.bin_index == 1
        assert event.uid is None

    def test_underflow_overflow_and_nan(self, test_histogram, capturing_writer):
        for sample in (-5.0, 10.0, math.inf, -math.inf, math.nan):
            test_histogram.record_sample(sample)

        assert [e.bin_index for e in capturing_writer.events] == [0, 11, 11, 0, 11]

    def test_each_call_is_independent(self, test_histogram, capturing_writer):
        """Test that repeated samples produce repeated identical events."""
        test_histogram.record_sample(3.3)
        test_histogram.record_sample(3.3)

        assert capturing_writer.events[0] == capturing_writer.events[1]
        assert len(capturing_writer.events) == 2

    def test_scaled_range_options(self, scaled_range_options, capturing_writer):
        histogram = Histogram("app.payload_bytes", scaled_range_options, writer=capturing_writer)

        histogram.record_sample(42)

        assert capturing_writer.tuples == [(hash_metric_id("app.payload_bytes"), 1, 3)]

    def test_custom_options_index_not_validated(self, capturing_writer):
        """Test that the bin index from the options is forwarded unchanged."""

        class FixedOptions:
            def bin_count(self):
                return 3

            def bucket_for(self, sample):
                return 7

        histogram = Histogram("test.metric", FixedOptions(), writer=capturing_writer)
        histogram.record_sample(1.0)

        assert capturing_writer.events[0].bin_index == 7


class TestRecordSampleWithUid:
    """Tests for uid attributed samples."""

    def test_uid_event(self, test_histogram, capturing_writer):
        test_histogram.record_sample_with_uid(10123, 9.999)

        event = capturing_writer.events[0]
        assert event.atom_id == AtomId.EXPRESS_UID_HISTOGRAM_SAMPLE_REPORTED
        assert event.uid == 10123
        assert event.as_tuple() == (hash_metric_id("test.metric"), 10123, 1, 10)


class TestRecordSamples:
    """Tests for record_samples."""

    def test_one_event_per_sample_in_order(self, test_histogram, capturing_writer):
        test_histogram.record_samples([-1.0, 0.0, 5.5, 9.999, 10.0, 1000.0])

        assert [e.bin_index for e in capturing_writer.events] == [0, 1, 6, 10, 11, 11]

    def test_generator_input(self, test_histogram, capturing_writer):
        test_histogram.record_samples(x / 2 for x in range(4))
        assert len(capturing_writer.events) == 4

    def test_empty_input(self, test_histogram, capturing_writer):
        test_histogram.record_samples([])
        assert capturing_writer.events == []


class TestHistogramConstruction:
    """Tests for construction and properties."""

    def test_metric_id_is_stable_hash(self, uniform_options):
        histogram = Histogram("test.metric", uniform_options)
        assert histogram.metric_id == hash_metric_id("test.metric")
        assert histogram.metric_name == "test.metric"
        assert histogram.options is uniform_options

    def test_any_name_accepted(self, uniform_options):
        """Test that construction never fails for unusual names."""
        for name in ("", "unknown.metric", "métrique.ünïcode", "x" * 1000):
            assert isinstance(Histogram(name, uniform_options).metric_id, int)

    def test_invalid_options_prevent_construction(self):
        """Test that a histogram cannot be built from invalid bin options."""
        with pytest.raises(ValueError):
            Histogram("test.metric", UniformOptions(0, 0.0, 10.0))

    def test_largest_bin_count_records_without_error(self, capturing_writer):
        """Test that the widest accepted options emit valid int32 bin indexes."""
        options = UniformOptions(MAX_BIN_COUNT, 0.0, 1.0)
        histogram = Histogram("test.metric", options, writer=capturing_writer)

        histogram.record_sample(5.0)
        histogram.record_sample(0.5)

        assert capturing_writer.events[0].bin_index == 2 ** 31 - 2
        assert 1 <= capturing_writer.events[1].bin_index <= MAX_BIN_COUNT

    def test_oversized_bin_count_rejected_before_recording(self):
        with pytest.raises(InvalidConfigurationError):
            Histogram("test.metric", UniformOptions(2 ** 31, 0.0, 1.0))

    def test_shared_options(self, uniform_options, capturing_writer):
        """Test that one immutable options object can back several histograms."""
        first = Histogram("metric.a", uniform_options, writer=capturing_writer)
        second = Histogram("metric.b", uniform_options, writer=capturing_writer)

        first.record_sample(1.5)
        second.record_sample(1.5)

        assert capturing_writer.tuples == [
            (hash_metric_id("metric.a"), 1, 2),
            (hash_metric_id("metric.b"), 1, 2),
        ]

    def test_repr(self, test_histogram):
        assert "test.metric" in repr(test_histogram)


class TestGlobalWriter:
    """Tests for the process-wide writer fallback."""

    def test_uses_global_writer_when_none_given(self, uniform_options):
        writer = CapturingStatsWriter()
        set_stats_writer(writer)

        Histogram("test.metric", uniform_options).record_sample(5.5)

        assert writer.tuples == [(hash_metric_id("test.metric"), 1, 6)]

    def test_global_writer_resolved_per_call(self, uniform_options):
        """Test that swapping the global writer affects existing histograms."""
        histogram = Histogram("test.metric", uniform_options)
        first = CapturingStatsWriter()
        second = CapturingStatsWriter()

        set_stats_writer(first)
        histogram.record_sample(1.0)
        set_stats_writer(second)
        histogram.record_sample(2.0)

        assert len(first.events) == 1
        assert len(second.events) == 1

    def test_explicit_writer_wins(self, uniform_options, capturing_writer):
        set_stats_writer(NullStatsWriter())

        Histogram("test.metric", uniform_options, writer=capturing_writer).record_sample(1.0)

        assert len(capturing_writer.events) == 1


class TestThreadSafety:
    """Tests for concurrent recording."""

    def test_concurrent_record_sample(self, capturing_writer):
        options = UniformOptions(100, 0.0, 1000.0)
        histogram = Histogram("test.concurrent", options, writer=capturing_writer)
        num_threads = 8
        samples_per_thread = 500

        def worker(offset: int):
            for i in range(samples_per_thread):
                histogram.record_sample(float((offset + i) % 1000))

        threads = [
            threading.Thread(target=worker, args=(t * samples_per_thread,))
            for t in range(num_threads)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        events = capturing_writer.events
        assert len(events) == num_threads * samples_per_thread
        assert all(1 <= e.bin_index <= 100 for e in events)
        assert all(e.metric_id == histogram.metric_id for e in events)

    def test_concurrent_scaled_range(self, capturing_writer):
        options = ScaledRangeOptions(10, 0, 1, 2)
        histogram = Histogram("test.scaled", options, writer=capturing_writer)

        threads = [
            threading.Thread(target=histogram.record_samples, args=(range(0, 2000, 7),))
            for _ in range(4)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        expected = [options.bucket_for(float(s)) for s in range(0, 2000, 7)]
        assert len(capturing_writer.events) == 4 * len(expected)
        assert sorted(e.bin_index for e in capturing_writer.events) == sorted(expected * 4)
