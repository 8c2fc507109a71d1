"""
Logging setup for the JobSwipe API.

Modules log through ``logging.getLogger(__name__)``; this module attaches the
handlers to the package logger once, at application start-up.
"""

import logging

from jobswipe.config import Settings

FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(settings: Settings) -> logging.Logger:
    """Set up the ``jobswipe`` logger based on settings."""
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logger = logging.getLogger('jobswipe')
    logger.setLevel(level)

    # Clear existing handlers so reloads do not double every line
    logger.handlers.clear()

    formatter = logging.Formatter(FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if settings.LOG_FILE:
        try:
            file_handler = logging.FileHandler(settings.LOG_FILE, encoding='utf-8')
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        except OSError as e:
            logger.warning(f"Could not set up file logging: {e}")

    return logger
