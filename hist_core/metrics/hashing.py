"""
Stable metric name hashing.

Metric ids must be identical across processes and restarts so events can be
aggregated downstream; Python's built-in hash() is salted per process and
cannot be used.
"""

import hashlib
from functools import lru_cache


@lru_cache(maxsize=1024)
def hash_metric_id(metric_name: str) -> int:
    """
    Hash a metric name into a signed 64-bit id.

    Args:
        metric_name: Human readable metric name, e.g. "app.startup_latency"

    Returns:
        First 8 bytes of SHA-256 over the UTF-8 name, as a big-endian
        signed 64-bit integer
    """
    digest = hashlib.sha256(metric_name.encode('utf-8')).digest()
    return int.from_bytes(digest[:8], byteorder='big', signed=True)
