"""
Application logging configuration.

Every smilies module logs through the single "smilies" logger: container
creation, uploads and purges at INFO, rejected uploads at WARNING, and
storage failures at ERROR with the provider's stack trace. Clients only see
static messages; the details end up here.
"""
import logging
import sys

from smilies.config import settings

LOGGER_NAME = "smilies"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str | None = None) -> logging.Logger:
    """
    Configure and return the smilies logger.

    Args:
        level: Log level name; defaults to settings.LOG_LEVEL

    Returns:
        logging.Logger: Logger writing to stdout

    Raises:
        ValueError: If the level name is unknown
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    numeric_level = logging.getLevelName(level_name)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level_name}")

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)

    # Modules call this at import time; attach the handler only once
    if not logger.handlers:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(console_handler)

    return logger
