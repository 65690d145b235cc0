"""Tests for log level resolution and structlog setup."""

import logging

import structlog
from storefront.utils.logging import configure_logging, get_log_level


class TestGetLogLevel:
    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "error")
        assert get_log_level() == "ERROR"

    def test_environment_default(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("ENVIRONMENT", raising=False)
        monkeypatch.setenv("PROTEAN_ENV", "production")
        assert get_log_level() == "INFO"

    def test_unknown_environment(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.setenv("ENVIRONMENT", "qa")
        assert get_log_level() == "INFO"


class TestConfigureLogging:
    def test_writes_log_files(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("LOG_LEVEL", "INFO")
        configure_logging()
        try:
            structlog.get_logger("storefront.test").info("hello", order_id="ord-1")
            for handler in logging.getLogger().handlers:
                handler.flush()
            assert "hello" in (tmp_path / "logs" / "storefront.log").read_text()
        finally:
            for handler in logging.getLogger().handlers:
                handler.close()
            logging.getLogger().handlers = []
            structlog.reset_defaults()
