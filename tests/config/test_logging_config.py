"""Tests for src/config/logging_config.py."""

import logging

import pytest

from src.config import settings as settings_module
from src.config.logging_config import configure_logging
from src.config.settings import get_settings


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def destino_handlers():
    return [h for h in logging.getLogger().handlers if h.get_name() == "destino"]


class TestConfigureLogging:
    def test_sets_level(self):
        root = configure_logging("debug")
        assert root is logging.getLogger()
        assert root.level == logging.DEBUG

    def test_single_handler_on_repeat(self):
        configure_logging("INFO")
        configure_logging("WARNING")
        assert len(destino_handlers()) == 1
        assert logging.getLogger().level == logging.WARNING

    def test_handler_format(self):
        configure_logging("INFO")
        formatter = destino_handlers()[0].formatter
        assert "%(name)s" in formatter._fmt

    def test_unknown_level(self):
        with pytest.raises(ValueError, match="Unknown log level"):
            configure_logging("LOUD")

    def test_falls_back_without_credentials(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(settings_module, "_load_streamlit_secrets", lambda: None)
        monkeypatch.delenv("SUPABASE_URL", raising=False)
        monkeypatch.delenv("SUPABASE_ANON_KEY", raising=False)
        get_settings.cache_clear()
        try:
            root = configure_logging()
        finally:
            get_settings.cache_clear()
        assert root.level == logging.INFO

    def test_uses_settings_level(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(settings_module, "_load_streamlit_secrets", lambda: None)
        monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
        monkeypatch.setenv("SUPABASE_ANON_KEY", "anon-key")
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        get_settings.cache_clear()
        try:
            root = configure_logging()
        finally:
            get_settings.cache_clear()
        assert root.level == logging.ERROR
