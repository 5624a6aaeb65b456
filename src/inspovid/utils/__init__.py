"""
Utility functions for inspovid.
"""

from inspovid.utils.formatting import format_duration, format_number
from inspovid.utils.logging import configure_logging, log_timed

__all__ = [
    "format_number",
    "format_duration",
    "log_timed",
    "configure_logging",
]
