"""Boundary Protocols — capabilities the core receives instead of reaching for globals.

Invariants:
    - Core NEVER reads the host clock or locale directly
    - Clock, calendar and scheduler are provided by the shell via dependency injection
    - All datetimes crossing these boundaries are timezone-aware

Design Decisions:
    - Protocol over ABC: structural subtyping, tests pass plain fakes
    - Scheduler callbacks are synchronous and O(1); the scheduler owns the async loop
    - catch_up=False lets a stalled frame job resume at the current time instead of replaying
"""

from datetime import datetime, tzinfo
from typing import Callable, Protocol


class ClockLike(Protocol):
    """Source of the current instant — SystemClock in production, fakes in tests."""
    def now(self) -> datetime: ...


class CalendarLike(Protocol):
    """Calendar and locale rules used for every boundary computation."""
    tz: tzinfo
    first_weekday: int
    minimum_days_in_first_week: int

    def localize(self, moment: datetime) -> datetime: ...
    def add_years(self, moment: datetime, years: int) -> datetime: ...
    def start_of_year(self, moment: datetime) -> datetime: ...
    def start_of_next_year(self, moment: datetime) -> datetime: ...
    def start_of_month(self, moment: datetime) -> datetime: ...
    def start_of_next_month(self, moment: datetime) -> datetime: ...
    def start_of_week(self, moment: datetime) -> datetime: ...
    def start_of_day(self, moment: datetime) -> datetime: ...
    def add_days(self, moment: datetime, days: int) -> datetime: ...
    def year_of(self, moment: datetime) -> int: ...
    def week_of_year(self, moment: datetime) -> int: ...
    def elapsed_seconds(self, start: datetime, end: datetime) -> float: ...


class SchedulerLike(Protocol):
    """Host-provided periodic trigger invoking synchronous callbacks at a fixed rate."""
    def every(
        self, hz: float, callback: Callable[[], object], name: str = "", catch_up: bool = True,
    ) -> None: ...
    def stop(self) -> None: ...
