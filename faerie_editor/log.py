"""
Logging setup for the editor.

All modules log through children of the "Faerie" logger. Nothing is printed
until setup_logging() installs handlers.
"""

import logging
import sys
from typing import Optional

LOGGER_NAME = "Faerie"

CONSOLE_FORMAT = "[%(levelname)s] %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(funcName)s: %(message)s"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get the package logger, or one of its children."""
    if name:
        return logging.getLogger(f"{LOGGER_NAME}.{name}")
    return logging.getLogger(LOGGER_NAME)


def setup_logging(log_file: Optional[str] = None, level: int = logging.DEBUG) -> logging.Logger:
    """
    Install the console handler and, optionally, a file handler.

    Calling this again replaces the handlers installed before.

    Args:
        log_file: Path of the log file, overwritten on every run. None logs to the console only.
        level: Minimum level of the records that are written

    Returns:
        The package logger
    """
    logger = get_logger()
    logger.setLevel(level)

    # Clear existing handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    logger.debug(f"Logging to console{f' and {log_file}' if log_file else ''}")
    return logger
