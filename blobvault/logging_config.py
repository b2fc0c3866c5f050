"""
Application logging configuration.

This module provides unified logging configuration for blobvault.
Storage failures are logged with full detail here while callers only
ever see the typed StorageException taxonomy.
"""
import logging
import sys

from blobvault.config import settings


def setup_logging() -> logging.Logger:
    """
    Configure and return the application logger.

    The logger outputs to stdout with a structured format including:
    - Timestamp
    - Logger name
    - Log level
    - Message

    The level comes from the LOG_LEVEL setting.

    Returns:
        logging.Logger: Configured logger instance
    """
    logger = logging.getLogger("blobvault")
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logger.setLevel(level)

    # Prevent duplicate handlers if called multiple times
    if not logger.handlers:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)

        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger
