"""
Tests for observability — logging setup and level resolution.
"""

import logging
from pathlib import Path

import pytest

from ghr_installer.core.observability.logging_config import resolve_level, setup_logging


class TestResolveLevel:
    """Tests for resolve_level()."""

    def test_default(self, monkeypatch):
        monkeypatch.delenv("GHRI_LOG_LEVEL", raising=False)
        assert resolve_level() == "WARNING"

    def test_env(self, monkeypatch):
        monkeypatch.setenv("GHRI_LOG_LEVEL", "INFO")
        assert resolve_level() == "INFO"

    @pytest.mark.parametrize("flags, expected", [
        ({"debug": True, "verbose": True, "quiet": True}, "DEBUG"),
        ({"verbose": True, "quiet": True}, "INFO"),
        ({"quiet": True}, "ERROR"),
    ])
    def test_flags_beat_env(self, monkeypatch, flags, expected):
        monkeypatch.setenv("GHRI_LOG_LEVEL", "CRITICAL")
        assert resolve_level(**flags) == expected


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_console_level(self, monkeypatch):
        monkeypatch.delenv("GHRI_LOG_FILE", raising=False)
        setup_logging("INFO")
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1

    def test_unknown_level_falls_back_to_warning(self, monkeypatch):
        monkeypatch.delenv("GHRI_LOG_FILE", raising=False)
        setup_logging("LOUD")
        assert logging.getLogger().level == logging.WARNING

    def test_file_from_env(self, tmp_path: Path, monkeypatch):
        log_file = tmp_path / "ghri.log"
        monkeypatch.setenv("GHRI_LOG_FILE", str(log_file))
        monkeypatch.setenv("GHRI_LOG_FILE_LEVEL", "DEBUG")
        setup_logging("WARNING")

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        logging.getLogger("ghr_installer.test").debug("to the file only")
        for handler in root.handlers:
            handler.flush()
        assert "to the file only" in log_file.read_text()
        for handler in root.handlers:
            if isinstance(handler, logging.FileHandler):
                handler.close()

    def test_noisy_loggers_quieted(self, monkeypatch):
        monkeypatch.delenv("GHRI_LOG_FILE", raising=False)
        setup_logging("INFO")
        assert logging.getLogger("urllib3").level == logging.WARNING

    def test_console_format_follows_level(self, monkeypatch):
        monkeypatch.delenv("GHRI_LOG_FILE", raising=False)
        setup_logging("WARNING")
        assert logging.getLogger().handlers[0].formatter._fmt.startswith("ghri: ")
        setup_logging("DEBUG")
        assert "%(lineno)d" in logging.getLogger().handlers[0].formatter._fmt
