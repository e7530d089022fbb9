"""
Logging configuration for the building lookup.

Provides a standardized logging setup with console and optional file output.
"""

import logging
import sys
from pathlib import Path
from typing import Optional


# Default logger name (parent of every module logger in the package)
LOGGER_NAME = "building_health"

# Cached logger instance
_logger: Optional[logging.Logger] = None


def get_logger() -> logging.Logger:
    """Get the package logger instance."""
    global _logger
    if _logger is None:
        _logger = logging.getLogger(LOGGER_NAME)
    return _logger


def setup_logging(log_dir: Optional[Path] = None, verbose: bool = False) -> logging.Logger:
    """
    Configure logging with a console handler and an optional file handler.

    Args:
        log_dir: Directory where the log file will be created (None for console only)
        verbose: If True, set console log level to DEBUG

    Returns:
        Configured logger instance
    """
    logger = get_logger()
    log_level = logging.DEBUG if verbose else logging.INFO

    formatter = logging.Formatter(
        '%(asctime)s | %(levelname)-8s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)

    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()
    logger.addHandler(console_handler)

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / "building_health.log"
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)  # Always log debug to file
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
        logger.info(f"Logging initialized. Log file: {log_file}")

    return logger
