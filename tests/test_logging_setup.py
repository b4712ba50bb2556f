"""Tests for logging_setup.py and settings.py."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from blockmark import logging_setup
from blockmark.logging_setup import configure_logging
from blockmark.settings import Settings, _env_int


class TestConfigureLogging:
    """Test handler installation on the package logger."""

    def test_default_level_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(logging_setup, "settings", Settings(log_level="DEBUG", log_path=None))

        configure_logging()

        logger = logging.getLogger("blockmark")
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.StreamHandler)

    def test_explicit_level_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(logging_setup, "settings", Settings(log_level="DEBUG", log_path=None))

        configure_logging("warning")

        assert logging.getLogger("blockmark").level == logging.WARNING

    def test_repeated_calls_replace_handlers(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(logging_setup, "settings", Settings(log_path=None))

        configure_logging()
        configure_logging()

        assert len(logging.getLogger("blockmark").handlers) == 1

    def test_rotating_file_handler(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        log_path = tmp_path / "logs" / "blockmark.log"
        monkeypatch.setattr(
            logging_setup,
            "settings",
            Settings(log_path=log_path, log_max_bytes=2048, log_backup_count=2),
        )

        configure_logging("INFO")
        logging.getLogger("blockmark.service").info("hello file")

        handlers = logging.getLogger("blockmark").handlers
        file_handlers = [h for h in handlers if isinstance(h, RotatingFileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].maxBytes == 2048
        assert file_handlers[0].backupCount == 2

        file_handlers[0].flush()
        assert "hello file" in log_path.read_text(encoding="utf-8")


class TestEnvInt:
    """Test integer environment settings."""

    def test_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("BLOCKMARK_TEST_INT", raising=False)

        assert _env_int("BLOCKMARK_TEST_INT", 7) == 7

    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BLOCKMARK_TEST_INT", "42")

        assert _env_int("BLOCKMARK_TEST_INT", 7) == 42

    def test_minimum_enforced(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BLOCKMARK_TEST_INT", "10")

        assert _env_int("BLOCKMARK_TEST_INT", 2048, min_val=1024) == 1024
