"""
Logging Configuration Module

Provides consistent logging setup for the extraction, chunking and
ingestion packages.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

PACKAGE_LOGGERS = ("extraction", "chunking", "ingestion")

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None
) -> list[logging.Logger]:
    """
    Configure logging for the ingestion packages.

    Args:
        level: Logging level, numeric or by name (default: INFO)
        log_file: Optional path to log file
        format_string: Optional custom format string

    Returns:
        The configured package loggers
    """
    level = _resolve_level(level)
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    loggers = []
    for name in PACKAGE_LOGGERS:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        # Remove existing handlers to avoid duplicates
        logger.handlers.clear()
        for handler in handlers:
            logger.addHandler(handler)
        logger.propagate = False
        loggers.append(logger)

    return loggers


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger below the ingestion package logger.

    Args:
        name: Module name (typically __name__)
    """
    if name.split(".", 1)[0] in PACKAGE_LOGGERS:
        return logging.getLogger(name)
    return logging.getLogger(f"ingestion.{name}")
