"""Logging configuration for alloylsp."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

ROOT_LOGGER_NAME = "alloylsp"


def configure_logging(*, level: str = "INFO", log_file: Path | None = None) -> None:
    """
    Configure the alloylsp logger hierarchy.

    Logs go to stderr unless a file is given; stdout carries the LSP stream
    in stdio mode and must stay clean.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL),
            case insensitive. Unknown names fall back to INFO.
        log_file: Optional path to log file.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(log_level)
    logger.handlers.clear()

    if log_file is not None:
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)

    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    handler.setLevel(log_level)
    logger.addHandler(handler)
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger named ``alloylsp.<name>``."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
