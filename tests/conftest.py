"""
Pytest configuration og shared fixtures.
"""

import logging
from pathlib import Path

import pytest

from rangecopy.config import Settings
from rangecopy.services.copy.range_copier import RangeCopier


@pytest.fixture(autouse=True)
def reset_root_logger():
    """setup_logging() replaces root handlers, put pytest's back afterwards."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.fixture
def settings() -> Settings:
    """Settings uden env fil, så lokale settings.env ikke påvirker tests."""
    return Settings(_env_file=None, chunk_size_kb=1, log_level="DEBUG")


@pytest.fixture
def copier(settings) -> RangeCopier:
    """Copier with a tiny chunk size so small files need several chunks."""
    return RangeCopier(settings, chunk_size=4)


@pytest.fixture
def make_file(tmp_path):
    """Factory: make_file("name", b"content") -> Path."""

    def _make_file(name: str, content: bytes) -> Path:
        path = tmp_path / name
        path.write_bytes(content)
        return path

    return _make_file


@pytest.fixture
def sixteen_bytes(make_file) -> Path:
    """Source file containing 0x00..0x0F."""
    return make_file("source.bin", bytes(range(16)))
