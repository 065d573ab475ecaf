"""Test setup for flashmap."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

DATA_DIR = Path(__file__).resolve().parent / "data"


@pytest.fixture
def data_dir() -> Path:
    """Directory holding descriptor fixtures."""
    return DATA_DIR


@pytest.fixture
def chromeos_path() -> Path:
    """Path of the hand-written ChromeOS style descriptor."""
    return DATA_DIR / "chromeos.fmd"


@pytest.fixture
def chromeos(chromeos_path: Path):
    """Freshly parsed ChromeOS style flashmap."""
    from flashmap.parser import read_flashmap

    return read_flashmap(chromeos_path)


@pytest.fixture(autouse=True)
def reset_flashmap_logging():
    """Drop handlers the CLI installs so they do not outlive captured streams."""
    yield
    package_logger = logging.getLogger("flashmap")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
