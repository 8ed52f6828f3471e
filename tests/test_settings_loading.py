"""
Test settings loading from the environment.

Every section must load with defaults and honour its exact env aliases.
"""
from __future__ import annotations

import logging

import pytest

from ordering.infrastructure.logging import get_logger
from ordering.settings import DatabaseSettings, LoggingSettings, get_app_settings


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch, tmp_path):
    # keep a developer's .env out of the way
    monkeypatch.chdir(tmp_path)
    for key in ("DB_URL", "DB_ECHO_SQL", "LOG_LEVEL", "LOG_FORMAT"):
        monkeypatch.delenv(key, raising=False)
    get_app_settings.cache_clear()
    yield
    get_app_settings.cache_clear()


def test_defaults():
    settings = get_app_settings()

    assert settings.database.url == "sqlite+aiosqlite:///./ordering.db"
    assert settings.database.echo_sql is False
    assert settings.logging.level == "INFO"
    assert "%(levelname)s" in settings.logging.log_format


def test_settings_are_cached():
    assert get_app_settings() is get_app_settings()


def test_env_aliases(monkeypatch):
    monkeypatch.setenv("DB_URL", "sqlite+aiosqlite:///:memory:")
    monkeypatch.setenv("DB_ECHO_SQL", "true")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = get_app_settings()

    assert settings.database.url == "sqlite+aiosqlite:///:memory:"
    assert settings.database.echo_sql is True
    assert settings.logging.level == "DEBUG"


def test_env_file_is_read(tmp_path):
    (tmp_path / ".env").write_text("LOG_LEVEL=warning\nUNRELATED_KEY=1\n", encoding="utf-8")

    assert LoggingSettings().level == "WARNING"
    assert DatabaseSettings().echo_sql is False


def test_get_logger_installs_single_handler():
    settings = LoggingSettings(level="debug", log_format="%(message)s")

    logger = get_logger("ordering.tests.single_handler", settings)
    again = get_logger("ordering.tests.single_handler")

    assert logger is again
    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
