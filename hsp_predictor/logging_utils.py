"""
Logging helpers for the HSP engine.

Library modules only ask for loggers through ``get_logger``; handlers are
attached by applications (examples, notebooks) via ``setup_logging``.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

ROOT_LOGGER = "hsp_predictor"


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    file_level: str = "DEBUG",
) -> logging.Logger:
    """
    Configure console (and optional file) logging for the package.

    Args:
        level: Console logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional path of a log file
        file_level: Logging level for the file handler

    Returns:
        The configured package root logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(logging.DEBUG)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, level.upper()))
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger below the package root.

    Args:
        name: Short module name, e.g. ``"selector"``. None returns the root.
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
