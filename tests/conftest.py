"""Pytest configuration for shared fixtures and path setup."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

SRC = Path(__file__).resolve().parent.parent / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture
def reset_logging():
    """Restore the package logger after a test configured it."""

    yield
    package_logger = logging.getLogger("query_codec")
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True
