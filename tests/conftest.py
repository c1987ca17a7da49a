"""
Pytest configuration and fixtures.
"""

import logging
from pathlib import Path
from typing import Callable

import pytest

from ngxconf.config.loader import ConfigLoader


CONFIGS_DIR = Path(__file__).parent / "configs"


@pytest.fixture
def configs_dir() -> Path:
    """Directory holding the named fixture configs."""
    return CONFIGS_DIR


@pytest.fixture
def loader() -> ConfigLoader:
    return ConfigLoader()


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str], Path]:
    """Write config text to a temporary file and return its path."""

    def _write(text: str, name: str = "nginx.conf") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging() during a test."""
    yield
    root_logger = logging.getLogger("ngxconf")
    for handler in root_logger.handlers:
        handler.close()
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)
