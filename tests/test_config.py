"""
Tests for Settings and setup_logging.
"""

import logging
import logging.handlers

import pytest
from pydantic import ValidationError

from rangecopy.config import Settings
from rangecopy.logging_config import setup_logging


class TestSettings:
    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.chunk_size_kb == 1024
        assert settings.chunk_size == 1024 * 1024
        assert settings.log_file_path == ""
        assert settings.log_directory is None

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("RANGECOPY_CHUNK_SIZE_KB", "16")

        settings = Settings(_env_file=None)

        assert settings.chunk_size == 16 * 1024

    def test_zero_chunk_size_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, chunk_size_kb=0)


class TestSetupLogging:
    def test_console_only_by_default(self):
        setup_logging(Settings(_env_file=None))

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert logging.getLogger().level == logging.WARNING

    def test_level_override(self):
        setup_logging(Settings(_env_file=None), level="info")

        assert logging.getLogger().level == logging.INFO

    def test_file_handler_when_path_set(self, tmp_path):
        log_file = tmp_path / "logs" / "rangecopy.log"
        settings = Settings(_env_file=None, log_file_path=str(log_file))

        setup_logging(settings)

        file_handlers = [
            h for h in logging.getLogger().handlers
            if isinstance(h, logging.handlers.TimedRotatingFileHandler)
        ]
        assert len(file_handlers) == 1
        assert log_file.parent.is_dir()
        file_handlers[0].close()
