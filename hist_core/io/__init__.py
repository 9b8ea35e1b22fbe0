"""
I/O Module: stats writers that receive recorded histogram samples.

Usage:
    from hist_core.io import get_stats_writer, set_stats_writer, NullStatsWriter

    set_stats_writer(NullStatsWriter())
"""

from .stats_writer import (
    StatsWriter,
    NullStatsWriter,
    LoggingStatsWriter,
    get_stats_writer,
    set_stats_writer,
    reset_stats_writer,
)

__all__ = [
    'StatsWriter',
    'NullStatsWriter',
    'LoggingStatsWriter',
    'get_stats_writer',
    'set_stats_writer',
    'reset_stats_writer',
]
