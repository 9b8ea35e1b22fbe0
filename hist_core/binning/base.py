"""
Bin Options Contract.

Defines the capability every binning strategy provides to a histogram:
the total number of bins and the mapping from a sample to its bin index.

Bin index layout (shared by all strategies):
    0                   underflow (sample below the covered range)
    1 .. count - 2      interior bins
    count - 1           overflow (sample at/above the covered range, NaN)
"""

from typing import Protocol, runtime_checkable

from hist_core.proto.histogram_sample import INT32_MAX

# Interior bin limit; the total count with underflow & overflow must fit int32
MAX_BIN_COUNT = INT32_MAX - 2


class InvalidConfigurationError(ValueError):
    """Raised when bin options are constructed with invalid parameters."""


@runtime_checkable
class BinOptions(Protocol):
    """
    Maps data samples to histogram bin indexes.

    Implementations must be immutable after construction and their
    bucket_for() must be defined for every float, NaN and infinities
    included.
    """

    def bin_count(self) -> int:
        """
        Total bins produced by these options.

        Returns:
            Bin count including the underflow and overflow bins
        """
        ...

    def bucket_for(self, sample: float) -> int:
        """
        Bin index for a sample.

        Returns:
            Zero based index in [0, bin_count())
        """
        ...


class FrozenOptions:
    """Mixin blocking attribute assignment once construction has finished."""

    __slots__ = ('_frozen',)

    def _freeze(self):
        object.__setattr__(self, '_frozen', True)

    def __setattr__(self, name, value):
        if getattr(self, '_frozen', False):
            raise AttributeError(f"{type(self).__name__} is immutable")
        object.__setattr__(self, name, value)

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")
