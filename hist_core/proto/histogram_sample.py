"""
Histogram Sample Message Schema.

Defines the event handed to the stats writer for every recorded sample:
one count increment for one bin of one metric.
"""

from dataclasses import dataclass
from typing import Optional
from enum import IntEnum

INT32_MIN = -2 ** 31
INT32_MAX = 2 ** 31 - 1
INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1


class AtomId(IntEnum):
    """Stats pipeline atom written for a histogram sample."""
    EXPRESS_HISTOGRAM_SAMPLE_REPORTED = 593
    EXPRESS_UID_HISTOGRAM_SAMPLE_REPORTED = 644


@dataclass(frozen=True)
class HistogramSampleEvent:
    """
    Count increment for a single histogram bin.

    Attributes:
        atom_id: Atom the event is written as
        metric_id: Stable 64-bit hash of the metric name
        count: Increment (always 1 for recorded samples)
        bin_index: Zero based bin index from the bin options
        uid: Attributed uid (only for EXPRESS_UID_HISTOGRAM_SAMPLE_REPORTED)
    """

    atom_id: AtomId
    metric_id: int
    count: int
    bin_index: int
    uid: Optional[int] = None

    def __post_init__(self):
        """Validate field ranges against the atom field widths."""
        if not INT64_MIN <= self.metric_id <= INT64_MAX:
            raise ValueError(f"Metric id does not fit int64: {self.metric_id}")
        if not INT32_MIN <= self.count <= INT32_MAX:
            raise ValueError(f"Count does not fit int32: {self.count}")
        if not INT32_MIN <= self.bin_index <= INT32_MAX:
            raise ValueError(f"Bin index does not fit int32: {self.bin_index}")

        has_uid_field = self.atom_id == AtomId.EXPRESS_UID_HISTOGRAM_SAMPLE_REPORTED
        if has_uid_field and self.uid is None:
            raise ValueError(f"{self.atom_id.name} requires a uid")
        if not has_uid_field and self.uid is not None:
            raise ValueError(f"{self.atom_id.name} has no uid field")
        if self.uid is not None and not INT32_MIN <= self.uid <= INT32_MAX:
            raise ValueError(f"Uid does not fit int32: {self.uid}")

    def as_tuple(self) -> tuple:
        """Atom field values in write order."""
        if self.uid is None:
            return (self.metric_id, self.count, self.bin_index)
        return (self.metric_id, self.uid, self.count, self.bin_index)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'atom_id': self.atom_id.name,
            'metric_id': self.metric_id,
            'count': self.count,
            'bin_index': self.bin_index,
            'uid': self.uid,
        }
