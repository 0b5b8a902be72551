"""
Logger helpers for theme_interpreter.

Handles logger creation, logging configuration and log levels.
"""

import logging
import sys
from typing import Optional

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def check_level(level: str) -> int:
    if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
        raise ValueError(f"Invalid log level: {level}")
    return getattr(logging, level.upper())


def get_logger(name: str) -> logging.Logger:
    """
    Get logger instance for module.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    if not name or not isinstance(name, str):
        raise ValueError("Logger name must be a non-empty string")
    return logging.getLogger(name)


def configure_logging(level: str = "WARNING", format_string: Optional[str] = None) -> None:
    """
    Configure stderr logging for the theme_interpreter package.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom format string
    """
    numeric_level = check_level(level)

    package_logger = logging.getLogger("theme_interpreter")
    package_logger.setLevel(numeric_level)
    package_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    package_logger.addHandler(handler)


def set_log_level(level: str) -> None:
    """
    Set log level of the package logger and its handlers.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    numeric_level = check_level(level)
    package_logger = logging.getLogger("theme_interpreter")
    package_logger.setLevel(numeric_level)
    for handler in package_logger.handlers:
        handler.setLevel(numeric_level)
