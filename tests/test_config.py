"""Settings validation."""

import pytest
from pydantic import ValidationError

from taskledger.config import Settings


def test_defaults():
    s = Settings()
    assert s.session_cookie_name == "sid"
    assert s.session_ttl_seconds == 86400
    assert s.session_sweep_interval_seconds == 60
    assert s.cookie_secure is False


def test_cookie_secure_in_production():
    assert Settings(environment="production").cookie_secure is True


def test_absolute_ttl_must_cover_idle_ttl():
    with pytest.raises(ValidationError):
        Settings(session_ttl_seconds=3600, session_absolute_ttl_seconds=60)


def test_wildcard_cors_rejected_in_production():
    with pytest.raises(ValidationError):
        Settings(environment="production", cors_origins=["*"])


def test_env_prefix(monkeypatch):
    monkeypatch.setenv("TASKLEDGER_SESSION_COOKIE_NAME", "ledger_sid")
    assert Settings().session_cookie_name == "ledger_sid"
