from __future__ import annotations

import logging
from dataclasses import replace

import pytest

from tracker.app import create_app
from tracker.core.config import get_settings
from tracker.core.logging import configure_logging
from tracker.repositories import build_repository
from tracker.repositories.json_storage import JSONRepository
from tracker.repositories.sql_repository import SQLRepository

from conftest import make_settings


def test_defaults(monkeypatch):
    for var in ("PORT", "STORAGE_BACKEND", "DATA_FILE", "CORS_ORIGINS", "LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    settings = get_settings()
    assert settings.port == 3001
    assert settings.storage_backend == "json"
    assert settings.cors_origins == ("*",)
    assert settings.log_level == "INFO"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("STORAGE_BACKEND", "SQL")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")
    settings = get_settings()
    assert settings.port == 8080
    assert settings.storage_backend == "sql"
    assert settings.cors_origins == ("http://a.test", "http://b.test")


def test_reload_is_opt_in(monkeypatch):
    monkeypatch.delenv("RELOAD", raising=False)
    monkeypatch.setenv("APP_ENV", "dev")
    assert get_settings().reload is False

    get_settings.cache_clear()
    monkeypatch.setenv("RELOAD", "1")
    assert get_settings().reload is True


def test_unknown_log_level_falls_back_to_info():
    configure_logging("VERBOSE")
    assert logging.getLogger("tracker").level == logging.INFO

    configure_logging("warning")
    assert logging.getLogger("tracker").level == logging.WARNING


def test_create_app_survives_unknown_log_level(tmp_path):
    settings = replace(make_settings(tmp_path), log_level="VERBOSE")
    assert create_app(settings).state.settings.log_level == "VERBOSE"


def test_bad_port_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("PORT", "not-a-port")
    assert get_settings().port == 3001


def test_unknown_backend_is_rejected(monkeypatch):
    monkeypatch.setenv("STORAGE_BACKEND", "mongo")
    with pytest.raises(RuntimeError):
        get_settings()


def test_build_repository_picks_strategy(monkeypatch, tmp_path):
    monkeypatch.setenv("DATA_FILE", str(tmp_path / "data.json"))
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'test.db'}")

    monkeypatch.setenv("STORAGE_BACKEND", "json")
    assert isinstance(build_repository(get_settings()), JSONRepository)

    get_settings.cache_clear()
    monkeypatch.setenv("STORAGE_BACKEND", "sql")
    repo = build_repository(get_settings())
    try:
        assert isinstance(repo, SQLRepository)
    finally:
        repo.close()
