"""Life Clock Service — drives the engines from a clock at two cadences.

Invariants:
    - start() must run before the first on_second(); it anchors the countdown to clock.now()
    - on_frame() (≈60 Hz) only samples proportions; it never touches the countdown
    - on_second() (1 Hz) is the only mutator of total_seconds_remaining
    - Listeners receive one snapshot per on_second(), after the tick
    - MementoError is logged once with its code and re-raised, never swallowed

Design Decisions:
    - Engines, clock and calendar are injected; from_settings() is the production wiring
    - Latest ProportionSet cached between frames so a 1 Hz snapshot reuses the last sample
"""

import logging
from datetime import datetime
from typing import Callable

from memento.config import Settings
from memento.core.calendar_rules import GregorianCalendar
from memento.core.countdown import CountdownEngine, RemainingBreakdown
from memento.core.dials import compose_dials
from memento.core.errors import MementoError
from memento.core.life_summary import LifeSummary, compute_life_summary
from memento.core.proportions import ProportionEngine, ProportionSet
from memento.core.protocols import CalendarLike, ClockLike, SchedulerLike
from memento.core.week_grid import WeekGridClassifier
from memento.infrastructure.clock import SystemClock
from memento.schemas.snapshot import (
    DialReading,
    LifeClockSnapshot,
    LifeSummaryReading,
    WeekCellReading,
)

logger = logging.getLogger(__name__)

SnapshotListener = Callable[[LifeClockSnapshot], None]


class LifeClock:
    """Imperative shell around CountdownEngine, ProportionEngine and WeekGridClassifier."""

    def __init__(
        self,
        clock: ClockLike,
        calendar: CalendarLike,
        countdown: CountdownEngine,
        grid: WeekGridClassifier,
        include_grid: bool = False,
    ):
        self.clock = clock
        self.calendar = calendar
        self.countdown = countdown
        self.proportion_engine = ProportionEngine(calendar)
        self.grid = grid
        self.include_grid = include_grid
        self._proportions: ProportionSet | None = None
        self._listeners: list[SnapshotListener] = []

    @classmethod
    def from_settings(cls, settings: Settings, clock: ClockLike | None = None) -> "LifeClock":
        calendar = GregorianCalendar(
            settings.zone(), settings.first_weekday, settings.minimum_days_in_first_week,
        )
        countdown = CountdownEngine(
            settings.birth_instant,
            settings.life_expectancy_years,
            calendar,
            expiry_policy=settings.expiry_policy,
            freeze_on_expiry=settings.freeze_breakdown_on_expiry,
        )
        grid = WeekGridClassifier(
            settings.birth_instant, settings.life_expectancy_years,
            calendar, settings.weeks_per_year,
        )
        return cls(
            clock or SystemClock(settings.zone()), calendar, countdown, grid,
            include_grid=settings.include_grid,
        )

    @property
    def proportions(self) -> ProportionSet | None:
        return self._proportions

    def subscribe(self, listener: SnapshotListener) -> None:
        self._listeners.append(listener)

    def _now(self, operation: str) -> datetime:
        try:
            return self.clock.now()
        except MementoError as e:
            logger.error(
                "Clock read failed during %s: %s", operation, e.message,
                extra={"component": "life_clock", "error_code": e.code},
            )
            raise

    # --- Callbacks ---------------------------------------------------------

    def start(self) -> RemainingBreakdown:
        now = self._now("start")
        try:
            breakdown = self.countdown.initialize(now)
        except MementoError as e:
            logger.error(
                "Countdown initialization failed: %s", e.message,
                extra={"component": "life_clock", "error_code": e.code},
            )
            raise
        self._proportions = self.proportion_engine.sample(now)
        logger.info(
            "Life clock started",
            extra={
                "component": "life_clock",
                "state": self.countdown.state.value,
                "total_seconds_remaining": self.countdown.total_seconds_remaining,
                "end_of_life": self.countdown.end_of_life,
            },
        )
        return breakdown

    def on_frame(self) -> ProportionSet:
        self._proportions = self.proportion_engine.sample(self._now("on_frame"))
        return self._proportions

    def on_second(self) -> RemainingBreakdown:
        breakdown = self.countdown.tick()
        if self._listeners:
            snap = self.snapshot()
            for listener in self._listeners:
                listener(snap)
        return breakdown

    def attach(self, scheduler: SchedulerLike, proportion_hz: float, countdown_hz: float) -> None:
        scheduler.every(proportion_hz, self.on_frame, name="proportions", catch_up=False)
        scheduler.every(countdown_hz, self.on_second, name="countdown", catch_up=True)

    # --- Read models -------------------------------------------------------

    def summary(self, now: datetime) -> LifeSummary:
        return compute_life_summary(
            self.countdown.birth_instant,
            self.countdown.end_of_life,
            self.countdown.life_expectancy_years,
            now,
            self.calendar,
            self.grid.weeks_per_year,
        )

    def snapshot(self, include_grid: bool | None = None) -> LifeClockSnapshot:
        now = self._now("snapshot")
        proportions = self._proportions or self.proportion_engine.sample(now)
        with_grid = self.include_grid if include_grid is None else include_grid
        grid = None
        if with_grid:
            grid = [
                [WeekCellReading.from_core(cell) for cell in row]
                for row in self.grid.build_grid(now)
            ]
        return LifeClockSnapshot(
            taken_at=now,
            birth_instant=self.countdown.birth_instant,
            end_of_life=self.countdown.end_of_life,
            state=self.countdown.state,
            total_seconds_remaining=self.countdown.total_seconds_remaining,
            dials=[
                DialReading.from_core(d)
                for d in compose_dials(self.countdown.breakdown, proportions)
            ],
            summary=LifeSummaryReading.from_core(self.summary(now)),
            grid=grid,
        )
