# inventory_service/core/logging_config.py
"""
Logging for the inventory service.

Service loggers (``inventory_service.*``) follow LOG_LEVEL. The HTTP and
database drivers only report warnings, otherwise every catalog lookup and
every stock statement would show up in the output.
"""

import logging
import os

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Driver loggers held at WARNING regardless of LOG_LEVEL
QUIET_LOGGERS = (
    "httpx",
    "httpcore",
    "sqlalchemy",
    "sqlalchemy.engine",
    "asyncpg",
    "aiosqlite",
)


def configure_logging(log_level: str = None) -> int:
    """
    Set up the root handler and per-library levels.

    Args:
        log_level: Level name; falls back to the LOG_LEVEL environment variable, then INFO

    Returns:
        The numeric level applied to the service loggers
    """
    name = (log_level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    level = getattr(logging, name, logging.INFO)

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=[logging.StreamHandler()])

    for logger_name in QUIET_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    for logger_name in ("inventory_service", "__main__"):
        logging.getLogger(logger_name).setLevel(level)

    logging.getLogger(__name__).debug(f"Service logging at {logging.getLevelName(level)}")
    return level


configure_logging()
