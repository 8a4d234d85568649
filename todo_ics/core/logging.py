"""
Logging setup for the feed service.

All modules log through logging.getLogger("todo_ics.<area>"), so a single
handler on the "todo_ics" logger covers the whole application.
"""

import logging
import sys


FORMAT = "[%(asctime)s] %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach a stdout handler to the application logger.

    Safe to call more than once; the handler is only added the first time.

    Args:
        level: Level name such as "INFO" or "DEBUG"

    Returns:
        The configured "todo_ics" logger
    """
    logger = logging.getLogger("todo_ics")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)

    return logger


def preview_secret(value: str, keep: int = 8) -> str:
    """Shorten a secret for log output."""
    if len(value) <= keep:
        return "*" * len(value)
    return f"{value[:keep]}..."
