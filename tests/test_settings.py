import pytest
from pydantic import ValidationError

from utils import AppSettings, CorsSettings, DatabaseSettings, RankingSettings


def test_default_settings(monkeypatch):
    for name in ("APP_NAME", "DB_URL", "RANKING_LOOKBACK_DAYS", "CORS_ALLOWED_METHODS"):
        monkeypatch.delenv(name, raising=False)

    assert AppSettings().name == "GymRank"
    assert AppSettings().write_rate_limit == "30/minute"
    assert DatabaseSettings().url == "sqlite+aiosqlite:///./gymrank.db"
    assert RankingSettings().lookback_days == 29
    assert CorsSettings().allowed_methods == ["GET", "POST", "PUT"]


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("DB_URL", "sqlite+aiosqlite:///./other.db")
    monkeypatch.setenv("RANKING_LOOKBACK_DAYS", "14")
    monkeypatch.setenv("APP_RATE_LIMIT_ENABLED", "false")

    assert DatabaseSettings().url == "sqlite+aiosqlite:///./other.db"
    assert RankingSettings().lookback_days == 14
    assert AppSettings().rate_limit_enabled is False


def test_lookback_days_must_be_positive(monkeypatch):
    monkeypatch.setenv("RANKING_LOOKBACK_DAYS", "0")

    with pytest.raises(ValidationError):
        RankingSettings()
