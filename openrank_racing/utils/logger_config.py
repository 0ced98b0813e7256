"""
Logging configuration for the racing bar package.

Every module logs through `logging.getLogger(__name__)`; this module only
attaches handlers to the package logger once at startup.
"""

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "openrank_racing"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# httpx logs every request at INFO; a sweep issues one per month
NOISY_LOGGERS = ("httpx", "httpcore")


def setup_logging(
    level: str = "INFO",
    format_string: Optional[str] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Attach console (and optional file) handlers to the package logger.

    Calling it again replaces the handlers from the previous call. HTTP
    client loggers are raised to WARNING unless level is DEBUG.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Record format (defaults to DEFAULT_FORMAT)
        log_file: Optional path that also receives records

    Returns:
        The package logger
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(numeric_level)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    client_level = logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(client_level)

    return package_logger
