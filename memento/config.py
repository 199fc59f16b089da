"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every setting comes from MEMENTO_* environment variables or .env, with a working default
    - get_settings() is cached (lru_cache) — single instance per process
    - Out-of-range values fail at load time with pydantic ValidationError

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - timezone=None means the host's local zone
    - first_weekday uses Python numbering (0=Monday); the default 6 is the US Sunday start
"""

from datetime import datetime, tzinfo
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from memento.core.domain_types import (
    DEFAULT_LIFE_EXPECTANCY_YEARS,
    WEEKS_PER_YEAR,
    ExpiryPolicy,
)


class Settings(BaseSettings):
    """Life clock settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MEMENTO_", env_file=".env", case_sensitive=False,
    )

    # Anchors
    birth_instant: datetime = datetime(1998, 7, 25)
    life_expectancy_years: int = Field(DEFAULT_LIFE_EXPECTANCY_YEARS, gt=0)

    # Grid
    weeks_per_year: int = Field(WEEKS_PER_YEAR, ge=1, le=53)

    # Calendar
    timezone: str | None = None
    first_weekday: int = Field(6, ge=0, le=6)
    minimum_days_in_first_week: int = Field(1, ge=1, le=7)

    @field_validator("timezone")
    @classmethod
    def check_timezone(cls, v: str | None) -> str | None:
        """Reject unknown IANA keys at load time rather than on first use."""
        if v is None or not v.strip():
            return None
        try:
            ZoneInfo(v.strip())
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown timezone {v!r}") from exc
        return v.strip()

    # Expiry
    expiry_policy: ExpiryPolicy = ExpiryPolicy.CLAMP
    freeze_breakdown_on_expiry: bool = True

    # Scheduling
    proportion_hz: float = Field(60.0, gt=0)
    countdown_hz: float = Field(1.0, gt=0)
    run_seconds: float | None = Field(None, gt=0)
    include_grid: bool = False

    # Observability
    log_level: str = "INFO"
    log_format: str = Field("json", pattern=r"^(json|text)$")

    def zone(self) -> tzinfo | None:
        return ZoneInfo(self.timezone) if self.timezone else None


@lru_cache
def get_settings() -> Settings:
    return Settings()
