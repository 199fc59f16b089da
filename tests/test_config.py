"""Settings — tests for defaults, env parsing and validation."""

from datetime import datetime

import pytest
from pydantic import ValidationError
from zoneinfo import ZoneInfo

from memento.config import Settings, get_settings
from memento.core.domain_types import ExpiryPolicy


def test_defaults_match_original_anchors():
    settings = Settings(timezone=None)
    assert settings.birth_instant == datetime(1998, 7, 25)
    assert settings.life_expectancy_years == 75
    assert settings.weeks_per_year == 52
    assert settings.first_weekday == 6
    assert settings.minimum_days_in_first_week == 1
    assert settings.expiry_policy == ExpiryPolicy.CLAMP
    assert settings.freeze_breakdown_on_expiry is True
    assert settings.proportion_hz == 60.0
    assert settings.countdown_hz == 1.0
    assert settings.zone() is None


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("MEMENTO_BIRTH_INSTANT", "1990-01-02T03:04:05")
    monkeypatch.setenv("MEMENTO_LIFE_EXPECTANCY_YEARS", "80")
    monkeypatch.setenv("MEMENTO_TIMEZONE", "Europe/Berlin")
    monkeypatch.setenv("MEMENTO_EXPIRY_POLICY", "raise")
    settings = Settings()
    assert settings.birth_instant == datetime(1990, 1, 2, 3, 4, 5)
    assert settings.life_expectancy_years == 80
    assert settings.zone() == ZoneInfo("Europe/Berlin")
    assert settings.expiry_policy == ExpiryPolicy.RAISE


@pytest.mark.parametrize("field, value", [
    ("life_expectancy_years", 0),
    ("life_expectancy_years", -3),
    ("weeks_per_year", 54),
    ("first_weekday", 7),
    ("minimum_days_in_first_week", 0),
    ("proportion_hz", 0),
    ("countdown_hz", -1),
    ("log_format", "xml"),
    ("timezone", "Mars/Olympus_Mons"),
])
def test_invalid_values_rejected(field, value):
    with pytest.raises(ValidationError):
        Settings(**{field: value})


def test_blank_timezone_means_host_local():
    assert Settings(timezone="  ").timezone is None


def test_get_settings_is_cached():
    get_settings.cache_clear()
    try:
        assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()
