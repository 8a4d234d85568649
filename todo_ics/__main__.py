"""
Service entry point.

Usage:
    python -m todo_ics       Serve the feed on HOST:PORT
"""

import logging
import sys

import uvicorn

from todo_ics.core.config import require_valid_settings, settings
from todo_ics.core.logging import setup_logging
from todo_ics.environments.base import ConfigError


logger = logging.getLogger("todo_ics")


def main() -> int:
    setup_logging(settings.LOG_LEVEL)

    try:
        require_valid_settings(settings)
    except ConfigError as e:
        for problem in e.problems:
            logger.error(f"Configuration error: {problem}")
        return 1

    from todo_ics.main import create_app

    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
