"""
Uniform (linear) bin options.

Splits the half-open range [min_value, exclusive_max_value) into bin_count
equally sized bins and adds an underflow and an overflow bin around them:

    bin index              covers
    0 (underflow)          [-inf, min_value)
    1 <= i <= bin_count    [min_value + (i-1) * width, min_value + i * width)
    bin_count + 1          [exclusive_max_value, +inf] and NaN

NaN compares false against both bounds, so it is routed to the overflow
bin explicitly instead of reaching the arithmetic branch.
"""

import math
import logging
from typing import Iterable, Union

import numpy as np

from .base import MAX_BIN_COUNT, FrozenOptions, InvalidConfigurationError

logger = logging.getLogger(__name__)


class UniformOptions(FrozenOptions):
    """
    Bin options for uniformly sized bins.

    Usage:
        options = UniformOptions(bin_count=10, min_value=0.0, exclusive_max_value=10.0)
        options.bin_count()      # 12 (10 + underflow + overflow)
        options.bucket_for(5.5)  # 6
    """

    __slots__ = (
        '_interior_bin_count',
        '_min_value',
        '_exclusive_max_value',
        '_bin_width',
        '_total_bin_count',
    )

    def __init__(self, bin_count: int, min_value: float, exclusive_max_value: float):
        """
        Create options for uniformly sized bins.

        Args:
            bin_count: Number of interior bins; underflow & overflow bins are
                added automatically
            min_value: Included in the first interior bin, smaller samples go
                to underflow
            exclusive_max_value: Included in the overflow bin. To measure up
                to k_max accurately use k_max + 1

        Raises:
            InvalidConfigurationError: bin_count not an integer in
                [1, MAX_BIN_COUNT], or the range is empty
        """
        if not bin_count >= 1:
            raise InvalidConfigurationError(
                f"bin count must be positive: {bin_count}"
            )
        if bin_count > MAX_BIN_COUNT:
            raise InvalidConfigurationError(
                f"bin count {bin_count} exceeds maximum {MAX_BIN_COUNT}"
            )
        if bin_count != int(bin_count):
            raise InvalidConfigurationError(
                f"bin count must be an integer: {bin_count}"
            )
        bin_count = int(bin_count)

        # Check the stored floats, not the raw arguments
        min_value = float(min_value)
        exclusive_max_value = float(exclusive_max_value)

        # Negated so that NaN bounds are rejected as well
        if not exclusive_max_value > min_value:
            raise InvalidConfigurationError(
                f"invalid range: max must exceed min "
                f"(min={min_value}, max={exclusive_max_value})"
            )

        bin_width = (exclusive_max_value - min_value) / bin_count
        if bin_width == 0.0:
            raise InvalidConfigurationError(
                f"range [{min_value}, {exclusive_max_value}) is too narrow "
                f"for {bin_count} bins"
            )

        self._interior_bin_count = bin_count
        self._min_value = min_value
        self._exclusive_max_value = exclusive_max_value
        self._bin_width = bin_width
        # Implicitly add 2 for the underflow & overflow bins
        self._total_bin_count = self._interior_bin_count + 2
        self._freeze()

        logger.debug(f"UniformOptions created: {self!r}, width={bin_width}")

    @property
    def interior_bin_count(self) -> int:
        """Bins between underflow and overflow."""
        return self._interior_bin_count

    @property
    def min_value(self) -> float:
        return self._min_value

    @property
    def exclusive_max_value(self) -> float:
        return self._exclusive_max_value

    @property
    def bin_width(self) -> float:
        return self._bin_width

    @property
    def total_bin_count(self) -> int:
        return self._total_bin_count

    @property
    def overflow_bin(self) -> int:
        return self._total_bin_count - 1

    def bin_count(self) -> int:
        """Total bins, underflow and overflow included."""
        return self._total_bin_count

    def bucket_for(self, sample: float) -> int:
        """
        Bin index for a sample.

        Args:
            sample: Any float, NaN and infinities included

        Returns:
            0 for underflow, bin_count() - 1 for overflow and NaN,
            interior index otherwise
        """
        if sample < self._min_value:
            return 0
        if sample >= self._exclusive_max_value or math.isnan(sample):
            return self._total_bin_count - 1

        position = (sample - self._min_value) / self._bin_width
        if math.isnan(position):
            # inf / inf: the range itself overflowed the float range
            return 1

        # Rounding just below exclusive_max_value must not reach overflow
        return int(min(position, self._interior_bin_count - 1)) + 1

    def bucket_for_array(self, samples: Union[np.ndarray, Iterable[float]]) -> np.ndarray:
        """
        Vectorised bucket_for() over an array of samples.

        Args:
            samples: Array-like of floats

        Returns:
            int32 array of bin indexes, same shape as samples
        """
        values = np.asarray(samples, dtype=np.float64)

        with np.errstate(invalid='ignore', over='ignore'):
            position = (values - self._min_value) / self._bin_width
        position = np.nan_to_num(position, nan=0.0)
        interior = np.minimum(np.floor(position), self._interior_bin_count - 1) + 1

        overflow = (values >= self._exclusive_max_value) | np.isnan(values)
        indexes = np.where(
            values < self._min_value,
            0,
            np.where(overflow, self._total_bin_count - 1, interior),
        )
        return indexes.astype(np.int32)

    def __eq__(self, other) -> bool:
        if not isinstance(other, UniformOptions):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return (
            f"UniformOptions(bin_count={self._interior_bin_count}, "
            f"min_value={self._min_value}, "
            f"exclusive_max_value={self._exclusive_max_value})"
        )

    def _key(self):
        return (self._interior_bin_count, self._min_value, self._exclusive_max_value)
