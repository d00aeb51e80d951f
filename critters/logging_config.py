"""Centralized logging configuration for the critters simulation."""

import logging
import os
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(
    level: Optional[str] = None,
    format: str = DEFAULT_FORMAT,
    datefmt: str = DEFAULT_DATEFMT,
) -> logging.Logger:
    """Configure package logging.

    Args:
        level: Optional explicit log level. Falls back to ``CRITTERS_LOG_LEVEL``
            env var or INFO when not provided.
        format: Log format string.
        datefmt: Date format string.

    Returns:
        The package logger (``critters``).
    """
    raw_level = level if level is not None else os.getenv("CRITTERS_LOG_LEVEL")
    resolved_level = (raw_level or "INFO").upper()
    logging.basicConfig(level=resolved_level, format=format, datefmt=datefmt)

    app_logger = logging.getLogger("critters")
    app_logger.setLevel(resolved_level)

    app_logger.debug("Logging configured at %s", resolved_level)
    return app_logger
