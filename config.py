"""
Histogram logging configuration.
"""

# Logging configuration
LOGGING_CONFIG = {
    "level": "INFO",
    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}

# Demo histogram (main.py)
HISTOGRAM_CONFIG = {
    "metric_name": "demo.sample_value",
    "bin_count": 10,              # Interior bins (underflow/overflow added)
    "min_value": 0.0,             # Inclusive lower bound of bin 1
    "exclusive_max_value": 10.0,  # Samples >= this go to overflow
}

# Stats writer configuration
STATS_WRITER_CONFIG = {
    "event_log_level": "INFO",    # Level for written sample events
}
