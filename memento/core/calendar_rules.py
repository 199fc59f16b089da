"""Calendar Rules — Gregorian calendar bound to one time zone and one week convention.

Invariants:
    - Every returned datetime is aware and expressed in self.tz
    - Boundaries (year/month/week/day starts) are local midnights, resolved by the zone
    - elapsed_seconds() compares instants in UTC, so DST days are 23h or 25h long
    - Overflow past datetime.min/max raises CalendarArithmeticOverflowError, never wraps

Design Decisions:
    - Week numbering follows the first-weekday + minimum-days-in-first-week rule:
      (6, 1) is the US convention, (0, 4) reproduces ISO-8601
    - Calendar-year addition keeps month/day; Feb 29 falls back to Feb 28
    - Weekdays use Python numbering (0=Monday .. 6=Sunday)
"""

import calendar
from datetime import date, datetime, time, timedelta, timezone, tzinfo

from memento.core.domain_types import DAYS_PER_WEEK
from memento.core.errors import CalendarArithmeticOverflowError, ErrorContext


def _overflow(operation: str, exc: Exception) -> CalendarArithmeticOverflowError:
    return CalendarArithmeticOverflowError(
        operation, str(exc),
        ErrorContext(component="calendar", operation=operation),
    )


class GregorianCalendar:
    """Calendar capability injected into every engine."""

    def __init__(
        self,
        tz: tzinfo | None = None,
        first_weekday: int = calendar.SUNDAY,
        minimum_days_in_first_week: int = 1,
    ):
        if not 0 <= first_weekday <= 6:
            raise ValueError(f"first_weekday must be 0..6, got {first_weekday}")
        if not 1 <= minimum_days_in_first_week <= 7:
            raise ValueError(
                "minimum_days_in_first_week must be 1..7, "
                f"got {minimum_days_in_first_week}"
            )
        self.tz = tz or datetime.now().astimezone().tzinfo or timezone.utc
        self.first_weekday = first_weekday
        self.minimum_days_in_first_week = minimum_days_in_first_week

    @classmethod
    def iso(cls, tz: tzinfo | None = None) -> "GregorianCalendar":
        """ISO-8601 weeks: Monday first, week 1 holds the first Thursday."""
        return cls(tz, calendar.MONDAY, 4)

    def __repr__(self) -> str:
        return (
            f"GregorianCalendar(tz={self.tz!s}, first_weekday={self.first_weekday}, "
            f"minimum_days_in_first_week={self.minimum_days_in_first_week})"
        )

    # --- Conversions -------------------------------------------------------

    def localize(self, moment: datetime) -> datetime:
        """Naive datetimes are read as wall time in self.tz; aware ones are converted."""
        if moment.tzinfo is None:
            return moment.replace(tzinfo=self.tz)
        return moment.astimezone(self.tz)

    def _midnight(self, day: date) -> datetime:
        return datetime.combine(day, time.min, tzinfo=self.tz)

    # --- Arithmetic --------------------------------------------------------

    def add_years(self, moment: datetime, years: int) -> datetime:
        local = self.localize(moment)
        target_year = local.year + years
        try:
            last_day = calendar.monthrange(target_year, local.month)[1]
            return local.replace(year=target_year, day=min(local.day, last_day))
        except (ValueError, OverflowError) as exc:
            raise _overflow("add_years", exc) from exc

    def add_days(self, moment: datetime, days: int) -> datetime:
        """Wall-clock day addition: same local time of day, offset re-resolved by the zone."""
        local = self.localize(moment)
        try:
            shifted = local.replace(tzinfo=None) + timedelta(days=days)
        except OverflowError as exc:
            raise _overflow("add_days", exc) from exc
        return shifted.replace(tzinfo=self.tz)

    def elapsed_seconds(self, start: datetime, end: datetime) -> float:
        """True elapsed seconds from start to end (negative when end precedes start)."""
        start_utc = self.localize(start).astimezone(timezone.utc)
        end_utc = self.localize(end).astimezone(timezone.utc)
        return (end_utc - start_utc).total_seconds()

    # --- Boundaries --------------------------------------------------------

    def start_of_day(self, moment: datetime) -> datetime:
        return self._midnight(self.localize(moment).date())

    def start_of_month(self, moment: datetime) -> datetime:
        return self._midnight(self.localize(moment).date().replace(day=1))

    def start_of_next_month(self, moment: datetime) -> datetime:
        first = self.localize(moment).date().replace(day=1)
        try:
            if first.month == 12:
                return self._midnight(first.replace(year=first.year + 1, month=1))
            return self._midnight(first.replace(month=first.month + 1))
        except ValueError as exc:
            raise _overflow("start_of_next_month", exc) from exc

    def start_of_year(self, moment: datetime) -> datetime:
        return self._midnight(date(self.localize(moment).year, 1, 1))

    def start_of_next_year(self, moment: datetime) -> datetime:
        try:
            return self._midnight(date(self.localize(moment).year + 1, 1, 1))
        except ValueError as exc:
            raise _overflow("start_of_next_year", exc) from exc

    def _days_into_week(self, day: date) -> int:
        return (day.weekday() - self.first_weekday) % DAYS_PER_WEEK

    def start_of_week(self, moment: datetime) -> datetime:
        day = self.localize(moment).date()
        try:
            return self._midnight(day - timedelta(days=self._days_into_week(day)))
        except OverflowError as exc:
            raise _overflow("start_of_week", exc) from exc

    # --- Components --------------------------------------------------------

    def year_of(self, moment: datetime) -> int:
        return self.localize(moment).year

    def _first_week_start(self, year: int) -> date:
        jan1 = date(year, 1, 1)
        offset = self._days_into_week(jan1)
        start = jan1 - timedelta(days=offset)
        if DAYS_PER_WEEK - offset < self.minimum_days_in_first_week:
            start += timedelta(days=DAYS_PER_WEEK)
        return start

    def week_of_year(self, moment: datetime) -> int:
        """1-based week number; days before week 1 belong to last year's final week."""
        day = self.localize(moment).date()
        year = day.year
        try:
            if year < 9999 and day >= self._first_week_start(year + 1):
                return 1
            week1 = self._first_week_start(year)
            if day < week1:
                week1 = self._first_week_start(year - 1)
        except (ValueError, OverflowError) as exc:
            raise _overflow("week_of_year", exc) from exc
        return (day - week1).days // DAYS_PER_WEEK + 1
