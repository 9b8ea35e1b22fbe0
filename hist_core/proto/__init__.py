"""
Protocol Module: events written to the stats pipeline.
"""

from .histogram_sample import (
    AtomId,
    HistogramSampleEvent,
)

__all__ = [
    'AtomId',
    'HistogramSampleEvent',
]
