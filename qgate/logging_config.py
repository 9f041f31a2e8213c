"""
Logging setup for qgate.

The library only creates loggers below the 'qgate' namespace and never
installs handlers on import. Applications call setup_logging() to see the
records.
"""

import logging
import sys
from pathlib import Path

from .config import get_config

ROOT_LOGGER_NAME = "qgate"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def setup_logging(level=None, log_file=None, format_string=None):
    """Attach console (and optional file) handlers to the qgate logger.

    Args:
        level: Logging level name or number (default: config log_level)
        log_file: Optional path of a file to write records to
        format_string: Optional custom format string

    Returns:
        The configured 'qgate' logger
    """
    if level is None:
        level = get_config().log_level
    if isinstance(level, str):
        name = level
        level = logging.getLevelName(name.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown logging level: {name}")

    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    # Drop handlers of an earlier setup_logging() call
    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
            handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name):
    """Return the logger for a qgate module.

    Args:
        name: Module name; 'qgate.' prefixes are not repeated

    Returns:
        logging.Logger below the 'qgate' namespace
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
