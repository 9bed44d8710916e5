from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tests._fixtures.icon_builder import IconBuilder


@pytest.fixture
def icon_builder(tmp_path: Path) -> IconBuilder:
    """Provide a reusable icon directory rooted at the pytest tmp_path."""
    return IconBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _reset_iconpack_logger():
    yield
    logger = logging.getLogger("iconpack")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
