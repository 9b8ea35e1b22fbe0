"""
Histogram Logging Core Package.

Maps numeric samples to histogram bin indexes and forwards one count
increment per sample to a stats writer.

Package structure:
- binning: Bin options (uniform, scaled range) mapping samples to bins
- proto: Event schema written to the stats pipeline
- io: Stats writers (logging, null) and the process-wide writer
- metrics: Histogram recorder, metric name hashing
"""

__version__ = "0.1.0"

from .binning import (
    BinOptions,
    InvalidConfigurationError,
    UniformOptions,
    ScaledRangeOptions,
)
from .metrics import Histogram, hash_metric_id

__all__ = [
    'BinOptions',
    'InvalidConfigurationError',
    'UniformOptions',
    'ScaledRangeOptions',
    'Histogram',
    'hash_metric_id',
]
