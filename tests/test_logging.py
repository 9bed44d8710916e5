"""Tests for iconpack.logging."""

from __future__ import annotations

import logging
from pathlib import Path

from iconpack.logging import configure_logging, get_logger


def test_get_logger_nests_under_package_logger() -> None:
    assert get_logger().name == "iconpack"
    assert get_logger("registry").name == "iconpack.registry"


def test_configure_logging_sets_level_and_replaces_handlers() -> None:
    configure_logging()
    logger = configure_logging(verbose=True)

    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert logger.propagate is False


def test_configure_logging_writes_to_log_file(tmp_path: Path) -> None:
    log_file = tmp_path / "build.log"
    logger = configure_logging(log_file=log_file)

    get_logger("pipeline").info("Build finished")
    for handler in logger.handlers:
        handler.flush()

    content = log_file.read_text(encoding="utf-8")
    assert "INFO iconpack.pipeline: Build finished" in content


def test_quiet_limits_console_to_warnings() -> None:
    logger = configure_logging(quiet=True)

    assert logger.level == logging.INFO
    assert logger.handlers[0].level == logging.WARNING


def test_quiet_keeps_log_file_complete(tmp_path: Path) -> None:
    logger = configure_logging(quiet=True, log_file=tmp_path / "logs" / "build.log")

    assert [handler.level for handler in logger.handlers] == [logging.WARNING, logging.INFO]
