"""
Logging configuration using loguru.

Entry points call setup_logging() once at startup; library modules just
``from loguru import logger``.
"""

import sys

from loguru import logger


def setup_logging(
    level: str = "WARNING",
    fmt: str = "<level>[{level.name}]</level> {message}",
) -> None:
    """
    Send loguru output to stderr at the given level.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR).
        fmt: Loguru format string.
    """
    logger.remove()
    logger.add(sys.stderr, level=level, format=fmt)
