"""
Pytest configuration and shared fixtures for histogram logging tests.

Provides standard bin options, an in-memory stats writer that captures
events, and a histogram wired to it.
"""

import sys
import threading
from pathlib import Path
from typing import List

import pytest

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from hist_core.binning import UniformOptions, ScaledRangeOptions
from hist_core.io import StatsWriter, reset_stats_writer
from hist_core.metrics import Histogram
from hist_core.proto import HistogramSampleEvent


class CapturingStatsWriter(StatsWriter):
    """Stats writer keeping every event in memory."""

    def __init__(self):
        self._lock = threading.Lock()
        self.events: List[HistogramSampleEvent] = []

    def write(self, event: HistogramSampleEvent) -> None:
        with self._lock:
            self.events.append(event)

    @property
    def tuples(self) -> List[tuple]:
        return [event.as_tuple() for event in self.events]


# =============================================================================
# Bin Options Fixtures
# =============================================================================


@pytest.fixture
def uniform_options() -> UniformOptions:
    """
    Ten unit-width bins over [0, 10).

    Returns:
        UniformOptions with 12 bins in total.
    """
    return UniformOptions(bin_count=10, min_value=0.0, exclusive_max_value=10.0)


@pytest.fixture
def scaled_range_options() -> ScaledRangeOptions:
    """
    Four doubling bins starting at 0 with width 10.

    Bounds: 0, 10, 30, 70, 150.
    """
    return ScaledRangeOptions(bin_count=4, min_value=0, first_bin_width=10, scale_factor=2)


# =============================================================================
# Writer / Histogram Fixtures
# =============================================================================


@pytest.fixture
def capturing_writer() -> CapturingStatsWriter:
    return CapturingStatsWriter()


@pytest.fixture
def test_histogram(uniform_options, capturing_writer) -> Histogram:
    """Histogram 'test.metric' writing into capturing_writer."""
    return Histogram("test.metric", uniform_options, writer=capturing_writer)


@pytest.fixture(autouse=True)
def _reset_global_writer():
    """Restore the process-wide stats writer around every test."""
    reset_stats_writer()
    yield
    reset_stats_writer()
