"""
Tests for environment-driven settings.
"""

from config import Settings


def test_unset_secret_key_gets_random_value(monkeypatch):
    monkeypatch.delenv("SECRET_KEY", raising=False)

    first, second = Settings(), Settings()

    assert first.secret_key_generated
    assert len(first.secret_key) >= 32
    assert first.secret_key != second.secret_key
    assert first.secret_key != "change_me"


def test_secret_key_from_environment(monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "from-env")

    settings = Settings()

    assert settings.secret_key == "from-env"
    assert not settings.secret_key_generated
