"""
Binning Module: sample to bin index strategies.

Strategies:
- UniformOptions: equally sized bins over [min, exclusive_max)
- ScaledRangeOptions: geometrically growing bins with integer bounds

Every strategy reserves index 0 for underflow and bin_count() - 1 for
overflow.

Usage:
    from hist_core.binning import UniformOptions

    options = UniformOptions(bin_count=10, min_value=0.0, exclusive_max_value=10.0)
    options.bucket_for(5.5)  # 6
"""

from typing import Iterable, Union

import numpy as np

from .base import BinOptions, InvalidConfigurationError
from .uniform import UniformOptions
from .scaled_range import ScaledRangeOptions


def bucket_for_samples(options: BinOptions,
                       samples: Union[np.ndarray, Iterable[float]]) -> np.ndarray:
    """
    Bin indexes for many samples at once.

    Args:
        options: Bin options to apply
        samples: Array-like of floats

    Returns:
        int32 numpy array of bin indexes
    """
    if isinstance(options, UniformOptions):
        return options.bucket_for_array(samples)

    values = np.asarray(samples, dtype=np.float64)
    flat = np.fromiter(
        (options.bucket_for(float(v)) for v in values.ravel()),
        dtype=np.int32,
        count=values.size,
    )
    return flat.reshape(values.shape)


__all__ = [
    'BinOptions',
    'InvalidConfigurationError',
    'UniformOptions',
    'ScaledRangeOptions',
    'bucket_for_samples',
]
