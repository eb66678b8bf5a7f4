#!/usr/bin/env python3
"""
Logging configuration for rustc_cfg.
"""

import sys
from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def setup_logging(log_level: str = "WARNING") -> None:
    """
    Set up logging configuration using loguru.

    Args:
        log_level: The logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    # Remove default logger
    logger.remove()

    logger.add(
        sys.stderr,
        format=LOG_FORMAT,
        level=log_level,
        colorize=True
    )

    logger.debug("Logging initialized")
