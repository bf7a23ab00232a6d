"""Utility modules for lemo.

Provides:
- logger: get_logger and configure_logging
- integers: signed 64-bit wrapping helpers
"""

from lemo.utils.integers import INT64_MAX, INT64_MIN, saturate_i64, wrap_i64
from lemo.utils.logger import configure_logging, get_logger

__all__ = [
    "INT64_MAX",
    "INT64_MIN",
    "configure_logging",
    "get_logger",
    "saturate_i64",
    "wrap_i64",
]
