"""Tests for application settings."""

from src.config import Settings


def test_defaults(monkeypatch) -> None:
    for name in ("DATABASE_URL", "TICK_INTERVAL_SECONDS", "AI_PROVIDER", "DEFAULT_PET_ID"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)
    assert settings.DATABASE_URL == "sqlite:///./pet.db"
    assert settings.DEFAULT_PET_ID == "default"
    assert settings.TICK_INTERVAL_SECONDS == 60
    assert settings.AI_PROVIDER == "mock"


def test_env_override(monkeypatch) -> None:
    monkeypatch.setenv("TICK_INTERVAL_SECONDS", "5")
    monkeypatch.setenv("TICK_ENABLED", "false")
    settings = Settings(_env_file=None)
    assert settings.TICK_INTERVAL_SECONDS == 5
    assert settings.TICK_ENABLED is False
