"""
Tests for environment configuration.
"""

import pytest

from shared.config import load_settings, missing_settings, validate_environment


def test_missing_settings_are_reported(monkeypatch):
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    monkeypatch.setenv("FRONTEND_URL", "")

    assert missing_settings() == ["GROQ_API_KEY", "FRONTEND_URL"]


def test_validate_environment_exits_when_incomplete(monkeypatch):
    monkeypatch.delenv("SUPABASE_URL", raising=False)

    with pytest.raises(SystemExit) as exc_info:
        validate_environment()

    assert exc_info.value.code == 1


def test_validate_environment_passes_when_complete():
    validate_environment()


def test_rate_limits_depend_on_environment(monkeypatch):
    monkeypatch.delenv("RATE_LIMIT_MAX", raising=False)
    monkeypatch.delenv("AUTH_RATE_LIMIT_MAX", raising=False)

    monkeypatch.setenv("ENVIRONMENT", "production")
    production = load_settings()
    monkeypatch.setenv("ENVIRONMENT", "development")
    development = load_settings()

    assert production.is_production
    assert (production.rate_limit_max, production.auth_rate_limit_max) == (100, 10)
    assert (development.rate_limit_max, development.auth_rate_limit_max) == (1000, 100)
    assert production.rate_limit_window == 900


def test_bad_integer_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("RATE_LIMIT_MAX", "lots")

    assert load_settings().rate_limit_max == 100
