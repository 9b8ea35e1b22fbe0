"""
Scaled range (geometric) bin options.

Each interior bin is scale_factor times wider than the previous one,
starting from first_bin_width. Bin lower bounds are integers:

    bounds[0] = min_value
    bounds[i] = int(bounds[i-1] + first_bin_width * scale_factor ** (i-1))

With bin_count interior bins there are bin_count + 1 bounds; the last one
is the exclusive maximum that opens the overflow bin.
"""

import math
import bisect
import logging
from typing import Tuple

from .base import MAX_BIN_COUNT, FrozenOptions, InvalidConfigurationError

logger = logging.getLogger(__name__)

# Bin bounds must fit a signed 32-bit int
MAX_BIN_BOUND = 2 ** 31 - 1


def _init_bounds(count: int, min_value: int, first_bin_width: float,
                 scale_factor: float) -> Tuple[int, ...]:
    """Precompute integer lower bounds for count bins."""
    bounds = [min_value]
    last_width = first_bin_width
    for _ in range(1, count):
        current_min = bounds[-1] + last_width
        if current_min > MAX_BIN_BOUND:
            raise InvalidConfigurationError(
                f"bin lower bound {current_min:.0f} exceeds maximum {MAX_BIN_BOUND}"
            )
        bounds.append(int(current_min))
        last_width *= scale_factor
    return tuple(bounds)


class ScaledRangeOptions(FrozenOptions):
    """
    Bin options for exponentially growing bins.

    Usage:
        options = ScaledRangeOptions(bin_count=4, min_value=0,
                                     first_bin_width=10, scale_factor=2)
        # bounds: 0, 10, 30, 70, 150
        options.bucket_for(42)   # 3
    """

    __slots__ = ('_bounds', '_scale_factor', '_first_bin_width')

    def __init__(self, bin_count: int, min_value: int, first_bin_width: float,
                 scale_factor: float):
        """
        Create options for scaled range bins.

        Args:
            bin_count: Number of interior bins
            min_value: Integer lower bound of the first interior bin
            first_bin_width: Width of the first interior bin, at least 1
            scale_factor: Growth factor between consecutive bin widths, at least 1

        Raises:
            InvalidConfigurationError: Parameter out of range, or a bin bound
                would exceed the signed 32-bit range
        """
        if bin_count < 1:
            raise InvalidConfigurationError(f"bin count must be positive: {bin_count}")
        if bin_count > MAX_BIN_COUNT:
            raise InvalidConfigurationError(
                f"bin count {bin_count} exceeds maximum {MAX_BIN_COUNT}"
            )
        if not first_bin_width >= 1:
            raise InvalidConfigurationError(
                f"first bin width must be at least 1: {first_bin_width}"
            )
        if not scale_factor >= 1:
            raise InvalidConfigurationError(
                f"scale factor must be at least 1: {scale_factor}"
            )

        # No bound is needed for the underflow bin
        self._bounds = _init_bounds(int(bin_count) + 1, int(min_value),
                                    float(first_bin_width), float(scale_factor))
        self._first_bin_width = float(first_bin_width)
        self._scale_factor = float(scale_factor)
        self._freeze()

        logger.debug(f"ScaledRangeOptions created: bounds={self._bounds}")

    @property
    def bounds(self) -> Tuple[int, ...]:
        """Integer lower bounds of the interior bins plus the exclusive max."""
        return self._bounds

    @property
    def min_value(self) -> int:
        return self._bounds[0]

    @property
    def exclusive_max_value(self) -> int:
        return self._bounds[-1]

    def bin_count(self) -> int:
        return len(self._bounds) + 1

    def bucket_for(self, sample: float) -> int:
        if sample < self._bounds[0]:
            return 0
        if sample >= self._bounds[-1] or math.isnan(sample):
            return len(self._bounds)

        # Bin whose integer lower bound is the largest one <= sample
        return bisect.bisect_right(self._bounds, math.floor(sample))

    def __eq__(self, other) -> bool:
        if not isinstance(other, ScaledRangeOptions):
            return NotImplemented
        return self._bounds == other._bounds

    def __hash__(self) -> int:
        return hash(self._bounds)

    def __repr__(self) -> str:
        return (
            f"ScaledRangeOptions(bin_count={len(self._bounds) - 1}, "
            f"min_value={self._bounds[0]}, "
            f"first_bin_width={self._first_bin_width}, "
            f"scale_factor={self._scale_factor})"
        )
