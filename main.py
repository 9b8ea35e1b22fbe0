"""
Histogram logging demo.

Records the given samples into a uniform histogram and prints the bin each
sample lands in.

    python main.py 0.5 3.2 11 --bins 10 --min 0 --max 10
"""

import sys
import logging
import argparse
from typing import List, Optional

import config
from hist_core.binning import InvalidConfigurationError, UniformOptions
from hist_core.io import LoggingStatsWriter
from hist_core.metrics import Histogram

logger = logging.getLogger(__name__)


class EchoStatsWriter(LoggingStatsWriter):
    """Logging writer that remembers the bin of the last written event."""

    def __init__(self, level: int = logging.DEBUG):
        super().__init__(level=level)
        self.last_bin_index: Optional[int] = None

    def write(self, event) -> None:
        super().write(event)
        self.last_bin_index = event.bin_index


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    defaults = config.HISTOGRAM_CONFIG
    parser = argparse.ArgumentParser(
        description="Map samples to histogram bins and log one event per sample."
    )
    parser.add_argument("samples", type=float, nargs="+", help="Sample values to record")
    parser.add_argument("--metric", default=defaults["metric_name"], help="Metric name")
    parser.add_argument("--bins", type=int, default=defaults["bin_count"],
                        help="Number of interior bins")
    parser.add_argument("--min", type=float, default=defaults["min_value"],
                        dest="min_value", help="Inclusive minimum of the first bin")
    parser.add_argument("--max", type=float, default=defaults["exclusive_max_value"],
                        dest="max_value", help="Exclusive maximum (overflow starts here)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    level = "DEBUG" if args.debug else config.LOGGING_CONFIG["level"]
    logging.basicConfig(
        level=getattr(logging, level),
        format=config.LOGGING_CONFIG["format"]
    )

    try:
        options = UniformOptions(args.bins, args.min_value, args.max_value)
    except InvalidConfigurationError as e:
        logger.error(f"Invalid histogram configuration: {e}")
        print(f"error: {e}", file=sys.stderr)
        return 2

    writer = EchoStatsWriter(
        level=getattr(logging, config.STATS_WRITER_CONFIG["event_log_level"])
    )
    histogram = Histogram(args.metric, options, writer=writer)

    print(f"{histogram.metric_name} (id={histogram.metric_id}, bins={options.bin_count()})")
    for sample in args.samples:
        histogram.record_sample(sample)
        print(f"  {sample:>12g} -> bin {writer.last_bin_index}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
