# MIT License (see LICENSE)
"""
Logging setup for applications embedding the simulator.

Library modules only create loggers (`logging.getLogger(__name__)`); they
never configure handlers. A driver calls setup_logging() once at startup.
"""
from __future__ import annotations
import logging
import sys

PACKAGE_LOGGER = "xpbd_tire"


def setup_logging(level: int = logging.INFO, log_file: str | None = None) -> logging.Logger:
    """
    Configure the `xpbd_tire` logger with a console handler.

    Args:
        level: Logging level (e.g. logging.DEBUG for per-step contact counts).
        log_file: Optional path; if given, logs are also written there.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # Avoid duplicate output when called more than once.
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger
