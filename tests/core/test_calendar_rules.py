"""Calendar Rules — tests for the injected Gregorian calendar capability."""

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from memento.core.calendar_rules import GregorianCalendar
from memento.core.errors import CalendarArithmeticOverflowError

US = GregorianCalendar(timezone.utc)
ISO = GregorianCalendar.iso(timezone.utc)
NY = ZoneInfo("America/New_York")


def _utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


# ─── add_years ───────────────────────────────────────────────────

def test_add_years_keeps_month_and_day():
    assert US.add_years(_utc(1998, 7, 25), 75) == _utc(2073, 7, 25)


def test_add_years_from_leap_day():
    assert US.add_years(_utc(2000, 2, 29), 1) == _utc(2001, 2, 28)
    assert US.add_years(_utc(2000, 2, 29), 4) == _utc(2004, 2, 29)


def test_add_years_overflow_raises():
    with pytest.raises(CalendarArithmeticOverflowError) as exc_info:
        US.add_years(_utc(9999, 1, 1), 1)
    assert exc_info.value.code == "CALENDAR_OVERFLOW"
    assert exc_info.value.operation == "add_years"


def test_add_years_keeps_wall_time_across_dst_offsets():
    winter = datetime(2020, 1, 15, 9, tzinfo=NY)
    shifted = GregorianCalendar(NY).add_years(winter, 1)
    assert (shifted.year, shifted.month, shifted.day, shifted.hour) == (2021, 1, 15, 9)


# ─── localize / elapsed ──────────────────────────────────────────

def test_localize_naive_reads_wall_time_in_zone():
    cal = GregorianCalendar(NY)
    assert cal.localize(datetime(2024, 1, 1, 9)).utcoffset() == timedelta(hours=-5)


def test_localize_converts_aware():
    cal = GregorianCalendar(NY)
    assert cal.localize(_utc(2024, 7, 1, 16)).hour == 12


def test_elapsed_seconds_spans_dst_gap():
    cal = GregorianCalendar(NY)
    start = cal.start_of_day(datetime(2024, 3, 10, 12, tzinfo=NY))
    end = cal.add_days(start, 1)
    assert cal.elapsed_seconds(start, end) == 23 * 3600


def test_elapsed_seconds_is_signed():
    assert US.elapsed_seconds(_utc(2024, 1, 2), _utc(2024, 1, 1)) == -86_400


# ─── boundaries ──────────────────────────────────────────────────

def test_start_of_boundaries():
    moment = _utc(2024, 6, 5, 13, 45, 12, 500)
    assert US.start_of_day(moment) == _utc(2024, 6, 5)
    assert US.start_of_month(moment) == _utc(2024, 6, 1)
    assert US.start_of_next_month(moment) == _utc(2024, 7, 1)
    assert US.start_of_year(moment) == _utc(2024, 1, 1)
    assert US.start_of_next_year(moment) == _utc(2025, 1, 1)


def test_start_of_next_month_rolls_december():
    assert US.start_of_next_month(_utc(2024, 12, 31, 23)) == _utc(2025, 1, 1)


def test_start_of_week_honours_first_weekday():
    wednesday = _utc(2024, 6, 5, 12)
    assert US.start_of_week(wednesday) == _utc(2024, 6, 2)
    assert ISO.start_of_week(wednesday) == _utc(2024, 6, 3)


def test_start_of_next_year_overflow_raises():
    with pytest.raises(CalendarArithmeticOverflowError):
        US.start_of_next_year(_utc(9999, 6, 1))


# ─── week_of_year ────────────────────────────────────────────────

def test_us_week_of_year_starts_on_jan_first():
    assert US.week_of_year(_utc(2024, 1, 1)) == 1
    assert US.week_of_year(_utc(2024, 1, 6)) == 1
    assert US.week_of_year(_utc(2024, 1, 7)) == 2


def test_us_last_days_of_december_can_be_week_one():
    assert US.week_of_year(_utc(2024, 12, 29)) == 1
    assert US.week_of_year(_utc(2024, 12, 28)) == 52


def test_iso_week_of_year_matches_isocalendar():
    day = date(2015, 1, 1)
    while day < date(2031, 1, 1):
        moment = datetime(day.year, day.month, day.day, tzinfo=timezone.utc)
        assert ISO.week_of_year(moment) == day.isocalendar()[1], day
        day += timedelta(days=1)


def test_year_of_uses_local_calendar_year():
    cal = GregorianCalendar(NY)
    assert cal.year_of(_utc(2025, 1, 1, 2)) == 2024


# ─── construction ────────────────────────────────────────────────

@pytest.mark.parametrize("kwargs", [
    {"first_weekday": 7},
    {"first_weekday": -1},
    {"minimum_days_in_first_week": 0},
    {"minimum_days_in_first_week": 8},
])
def test_invalid_week_rules_rejected(kwargs):
    with pytest.raises(ValueError):
        GregorianCalendar(timezone.utc, **kwargs)


def test_default_zone_is_host_local():
    assert GregorianCalendar().tz is not None
