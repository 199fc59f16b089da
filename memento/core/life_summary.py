"""Life Summary — calendar-accurate age and remaining-life figures.

Invariants:
    - age_years counts completed calendar years since birth (birthdays passed)
    - calendar_days_remaining counts whole elapsed days from now to end-of-life, never negative
    - weeks_lived counts whole elapsed days since birth, divided into 7-day weeks
    - A whole day is a wall-clock day: now + n days must not pass the later instant
    - fraction_lived is clamped to [0, 1]; weeks_lived never exceeds total_weeks
    - Never raises for instants before birth or after end-of-life

Design Decisions:
    - Separate from CountdownEngine: the countdown is the approximate display counter,
      the summary is the calendar view of the same anchors
"""

from dataclasses import dataclass
from datetime import datetime

from memento.core.domain_types import DAYS_PER_WEEK, WEEKS_PER_YEAR
from memento.core.protocols import CalendarLike


@dataclass(frozen=True)
class LifeSummary:
    age_years: int
    calendar_years_remaining: int
    calendar_days_remaining: int
    weeks_lived: int
    total_weeks: int
    fraction_lived: float


def completed_years(birth: datetime, now: datetime, calendar: CalendarLike) -> int:
    """Birthdays passed between birth and now (0 before the first)."""
    local_birth = calendar.localize(birth)
    local_now = calendar.localize(now)
    if local_now <= local_birth:
        return 0
    years = local_now.year - local_birth.year
    if calendar.add_years(local_birth, years) > local_now:
        years -= 1
    return years


def whole_days_between(start: datetime, end: datetime, calendar: CalendarLike) -> int:
    """Largest n with start + n wall-clock days <= end; 0 when end precedes start."""
    local_start = calendar.localize(start)
    local_end = calendar.localize(end)
    if local_end <= local_start:
        return 0
    days = (local_end.date() - local_start.date()).days
    while days > 0 and calendar.add_days(local_start, days) > local_end:
        days -= 1
    return days


def compute_life_summary(
    birth: datetime,
    end_of_life: datetime,
    life_expectancy_years: int,
    now: datetime,
    calendar: CalendarLike,
    weeks_per_year: int = WEEKS_PER_YEAR,
) -> LifeSummary:
    """Pure, no IO."""
    age = completed_years(birth, now, calendar)
    days_lived = whole_days_between(birth, now, calendar)
    days_left = whole_days_between(now, end_of_life, calendar)
    total_weeks = life_expectancy_years * weeks_per_year

    lifespan = calendar.elapsed_seconds(birth, end_of_life)
    lived = calendar.elapsed_seconds(birth, now)
    fraction = min(max(lived / lifespan, 0.0), 1.0) if lifespan > 0 else 1.0

    return LifeSummary(
        age_years=age,
        calendar_years_remaining=max(life_expectancy_years - age, 0),
        calendar_days_remaining=days_left,
        weeks_lived=min(days_lived // DAYS_PER_WEEK, total_weeks),
        total_weeks=total_weeks,
        fraction_lived=fraction,
    )
