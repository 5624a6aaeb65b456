"""
Logging utilities.
"""

import logging
import sys
import time

logger = logging.getLogger("inspovid")


def log_timed(msg: str, start_time: float | None = None) -> None:
    """Log timestamped message.

    Args:
        msg: Message to log
        start_time: Start time from time.monotonic(), or None for [START]
    """
    elapsed = f"[{time.monotonic() - start_time:.1f}s]" if start_time else "[START]"
    logger.info(f"{elapsed} {msg}")


def configure_logging(level: str = "INFO") -> None:
    """Send log records to stderr at the given level name."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(name)s: %(message)s",
        stream=sys.stderr,
    )
