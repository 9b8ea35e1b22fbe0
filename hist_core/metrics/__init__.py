"""
Metrics Module: histogram metric recorders.

Usage:
    from hist_core.binning import UniformOptions
    from hist_core.metrics import Histogram

    histogram = Histogram('app.latency_ms', UniformOptions(50, 0.0, 500.0))
    histogram.record_sample(12.5)
"""

from .hashing import hash_metric_id
from .histogram import Histogram

__all__ = ['Histogram', 'hash_metric_id']
