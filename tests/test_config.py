"""Tests for Settings."""

from app.services.config import Settings


def test_port_comes_from_environment(monkeypatch):
    monkeypatch.setenv("PORT", "9123")

    assert Settings().PORT == 9123


def test_defaults(monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.delenv("DB_NAME", raising=False)
    monkeypatch.delenv("ALLOWED_ORIGINS", raising=False)

    settings = Settings(_env_file=None)

    assert settings.PORT == 8000
    assert settings.DB_NAME == "next_auth_app"
    assert settings.ALLOWED_ORIGINS == []


def test_allowed_origins_split(monkeypatch):
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example,https://b.example")

    assert Settings().ALLOWED_ORIGINS == ["https://a.example", "https://b.example"]
