"""Build-log plumbing: every iconpack module logs under one `iconpack` tree."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

ROOT_LOGGER = "iconpack"

CONSOLE_FORMAT = "[iconpack] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Logger for one build stage, e.g. `get_logger("registry")`."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER)


def _handler(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Route build progress to the terminal and, when asked, to a log file.

    `verbose` adds per-icon DEBUG records. `quiet` trims the console to
    warnings but leaves the `log_file` record complete.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.propagate = False

    # One set of handlers per process, however many builds run in it.
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()

    console_level = logging.WARNING if quiet and not verbose else level
    logger.addHandler(_handler(logging.StreamHandler(sys.stderr), console_level, CONSOLE_FORMAT))

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.addHandler(_handler(logging.FileHandler(log_file, encoding="utf-8"), level, FILE_FORMAT))

    return logger


__all__ = ["configure_logging", "get_logger"]
