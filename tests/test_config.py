"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from lodging.config import Environment, Settings


def test_defaults(monkeypatch):
    for var in ("LODGING_ENV", "LODGING_LOG_LEVEL", "LODGING_API_TITLE", "LODGING_SEED_DATA"):
        monkeypatch.delenv(var, raising=False)
    settings = Settings.from_env()
    assert settings.env == Environment.DEVELOPMENT
    assert settings.log_level == "INFO"
    assert settings.seed_data is True


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("LODGING_ENV", "test")
    monkeypatch.setenv("LODGING_LOG_LEVEL", "debug")
    monkeypatch.setenv("LODGING_SEED_DATA", "false")
    settings = Settings.from_env()
    assert settings.env == Environment.TEST
    assert settings.log_level == "DEBUG"
    assert settings.seed_data is False


def test_rejects_unknown_log_level(monkeypatch):
    monkeypatch.setenv("LODGING_LOG_LEVEL", "chatty")
    with pytest.raises(ValidationError):
        Settings.from_env()
