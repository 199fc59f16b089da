"""Countdown Engine — seconds-until-end-of-life and its seven-unit breakdown.

Invariants:
    - birth_instant and life_expectancy_years are fixed at construction
    - end_of_life = birth_instant + life_expectancy_years calendar years
    - total_seconds_remaining is the single source of truth; breakdown derives from it only
    - tick() lowers the counter by exactly 1 while ACTIVE and never below 0
    - ACTIVE → EXPIRED once the counter reaches 0; no transition back
    - decompose() is NOT mixed-radix: every unit is an independent floor of the same total

Design Decisions:
    - Breakdown freezes at its last positive value on expiry (freeze_on_expiry=True),
      or drops to all zeros when freeze_on_expiry=False
    - initialize() past end-of-life clamps to 0 + EXPIRED, or raises PastEndOfLifeError
      under ExpiryPolicy.RAISE
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime

from memento.core.domain_types import (
    CountdownState,
    ExpiryPolicy,
    Granularity,
    MONTHS_PER_YEAR,
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
    SECONDS_PER_WEEK,
    WEEKS_PER_MONTH,
)
from memento.core.errors import (
    CountdownNotInitializedError,
    ErrorContext,
    InvalidConfigurationError,
    PastEndOfLifeError,
)
from memento.core.protocols import CalendarLike

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RemainingBreakdown:
    """Seven independent views of one remaining-seconds total."""
    years: int
    months: int
    weeks: int
    days: int
    hours: int
    minutes: int
    seconds: int

    def value(self, granularity: Granularity) -> int:
        return getattr(self, granularity.value)

    def as_dict(self) -> dict[str, int]:
        return {g.value: self.value(g) for g in Granularity}


def decompose(total_seconds_remaining: int) -> RemainingBreakdown:
    """Floor-divide the same total into each unit. Seconds is the raw total, not % 60."""
    weeks = total_seconds_remaining // SECONDS_PER_WEEK
    months = weeks // WEEKS_PER_MONTH
    return RemainingBreakdown(
        years=months // MONTHS_PER_YEAR,
        months=months,
        weeks=weeks,
        days=total_seconds_remaining // SECONDS_PER_DAY,
        hours=total_seconds_remaining // SECONDS_PER_HOUR,
        minutes=total_seconds_remaining // SECONDS_PER_MINUTE,
        seconds=total_seconds_remaining,
    )


class CountdownEngine:
    """Owns the anchor instants and the running remaining-seconds counter."""

    def __init__(
        self,
        birth_instant: datetime | None,
        life_expectancy_years: int,
        calendar: CalendarLike,
        expiry_policy: ExpiryPolicy = ExpiryPolicy.CLAMP,
        freeze_on_expiry: bool = True,
    ):
        ctx = ErrorContext(component="countdown", operation="construct")
        if birth_instant is None:
            raise InvalidConfigurationError(
                "birth_instant must be set", "birth_instant", ctx,
            )
        if (
            isinstance(life_expectancy_years, bool)
            or not isinstance(life_expectancy_years, int)
            or life_expectancy_years <= 0
        ):
            raise InvalidConfigurationError(
                f"life_expectancy_years must be a positive integer, "
                f"got {life_expectancy_years!r}",
                "life_expectancy_years", ctx,
            )
        self._calendar = calendar
        self._birth_instant = calendar.localize(birth_instant)
        self._life_expectancy_years = life_expectancy_years
        self._end_of_life = calendar.add_years(self._birth_instant, life_expectancy_years)
        self._expiry_policy = ExpiryPolicy(expiry_policy)
        self._freeze_on_expiry = freeze_on_expiry
        self._total_seconds_remaining = 0
        self._breakdown = decompose(0)
        self._state = CountdownState.ACTIVE
        self._initialized = False

    # --- Read-only view ----------------------------------------------------

    @property
    def birth_instant(self) -> datetime:
        return self._birth_instant

    @property
    def life_expectancy_years(self) -> int:
        return self._life_expectancy_years

    @property
    def end_of_life(self) -> datetime:
        return self._end_of_life

    @property
    def total_seconds_remaining(self) -> int:
        return self._total_seconds_remaining

    @property
    def breakdown(self) -> RemainingBreakdown:
        return self._breakdown

    @property
    def state(self) -> CountdownState:
        return self._state

    @property
    def is_expired(self) -> bool:
        return self._state == CountdownState.EXPIRED

    @property
    def initialized(self) -> bool:
        return self._initialized

    # --- Transitions -------------------------------------------------------

    def initialize(self, now: datetime) -> RemainingBreakdown:
        """Recompute the counter from the wall clock. No-op once EXPIRED."""
        if self.is_expired:
            return self._breakdown

        remaining = math.floor(self._calendar.elapsed_seconds(now, self._end_of_life))
        if remaining > 0:
            self._initialized = True
            self._total_seconds_remaining = remaining
            self._breakdown = decompose(remaining)
            return self._breakdown

        if self._expiry_policy == ExpiryPolicy.RAISE:
            raise PastEndOfLifeError(
                self._end_of_life, self._calendar.localize(now),
                ErrorContext(
                    component="countdown", operation="initialize",
                    debug_info={"total_seconds_remaining": remaining},
                ),
            )

        logger.warning(
            "End of life already reached; clamping countdown to zero",
            extra={"component": "countdown", "total_seconds_remaining": remaining},
        )
        self._initialized = True
        self._total_seconds_remaining = 0
        self._breakdown = decompose(0)
        self._expire()
        return self._breakdown

    def tick(self) -> RemainingBreakdown:
        """One elapsed second. Breakdown stops updating once the counter hits zero."""
        if not self._initialized:
            raise CountdownNotInitializedError(
                ErrorContext(component="countdown", operation="tick"),
            )
        if self.is_expired:
            return self._breakdown

        self._total_seconds_remaining -= 1
        if self._total_seconds_remaining > 0:
            self._breakdown = decompose(self._total_seconds_remaining)
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(
                    "Countdown tick",
                    extra={
                        "component": "countdown",
                        "state": self._state,
                        "total_seconds_remaining": self._total_seconds_remaining,
                        "breakdown": self._breakdown.as_dict(),
                    },
                )
            return self._breakdown

        self._total_seconds_remaining = 0
        if not self._freeze_on_expiry:
            self._breakdown = decompose(0)
        self._expire()
        return self._breakdown

    def _expire(self) -> None:
        self._state = CountdownState.EXPIRED
        logger.info(
            "Countdown expired",
            extra={
                "component": "countdown",
                "state": self._state,
                "total_seconds_remaining": self._total_seconds_remaining,
                "end_of_life": self._end_of_life,
            },
        )
