"""Proportion Engine — fraction of each cyclical period elapsed at a given instant.

Invariants:
    - Every fraction is a pure function of `now` and the calendar; no stored state
    - Year, month, week and day use true elapsed seconds between calendar boundaries
    - Hour and minute use wall-clock components, so they ignore sub-second drift
    - Sub-second is truncated to whole milliseconds before dividing
    - Results lie in [0, 1) for any instant the calendar can represent

Design Decisions:
    - Day fraction divides by the true length of the local day (86400 s except on DST days)
    - Week boundaries come from the calendar's first-weekday rule, not a fixed Monday
"""

from dataclasses import dataclass
from datetime import datetime

from memento.core.domain_types import (
    Fraction,
    Granularity,
    MICROSECONDS_PER_MILLISECOND,
    MILLISECONDS_PER_SECOND,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
)
from memento.core.protocols import CalendarLike


@dataclass(frozen=True)
class ProportionSet:
    """Elapsed fraction of the current year, month, week, day, hour, minute and second."""
    year: Fraction
    month: Fraction
    week: Fraction
    day: Fraction
    hour: Fraction
    minute: Fraction
    sub_second: Fraction

    def for_granularity(self, granularity: Granularity) -> Fraction:
        """Period that animates each countdown unit (seconds → sub-second tick)."""
        return {
            Granularity.YEARS: self.year,
            Granularity.MONTHS: self.month,
            Granularity.WEEKS: self.week,
            Granularity.DAYS: self.day,
            Granularity.HOURS: self.hour,
            Granularity.MINUTES: self.minute,
            Granularity.SECONDS: self.sub_second,
        }[granularity]


class ProportionEngine:
    """Stateless apart from the injected calendar. Safe to sample at 60 Hz."""

    def __init__(self, calendar: CalendarLike):
        self._calendar = calendar

    def _between(self, start: datetime, now: datetime, end: datetime) -> Fraction:
        elapsed = self._calendar.elapsed_seconds(start, now)
        total = self._calendar.elapsed_seconds(start, end)
        return Fraction(elapsed / total)

    def year_fraction(self, now: datetime) -> Fraction:
        cal = self._calendar
        return self._between(cal.start_of_year(now), now, cal.start_of_next_year(now))

    def month_fraction(self, now: datetime) -> Fraction:
        cal = self._calendar
        return self._between(cal.start_of_month(now), now, cal.start_of_next_month(now))

    def week_fraction(self, now: datetime) -> Fraction:
        start = self._calendar.start_of_week(now)
        return self._between(start, now, self._calendar.add_days(start, 7))

    def day_fraction(self, now: datetime) -> Fraction:
        start = self._calendar.start_of_day(now)
        return self._between(start, now, self._calendar.add_days(start, 1))

    def hour_fraction(self, now: datetime) -> Fraction:
        local = self._calendar.localize(now)
        return Fraction((local.minute * SECONDS_PER_MINUTE + local.second) / SECONDS_PER_HOUR)

    def minute_fraction(self, now: datetime) -> Fraction:
        return Fraction(self._calendar.localize(now).second / SECONDS_PER_MINUTE)

    def sub_second_fraction(self, now: datetime) -> Fraction:
        milliseconds = now.microsecond // MICROSECONDS_PER_MILLISECOND
        return Fraction(milliseconds / MILLISECONDS_PER_SECOND)

    def sample(self, now: datetime) -> ProportionSet:
        return ProportionSet(
            year=self.year_fraction(now),
            month=self.month_fraction(now),
            week=self.week_fraction(now),
            day=self.day_fraction(now),
            hour=self.hour_fraction(now),
            minute=self.minute_fraction(now),
            sub_second=self.sub_second_fraction(now),
        )
