"""Life Clock Service — tests for wiring, cadence callbacks and snapshots.

Invariants:
    - start() anchors the countdown to the injected clock
    - on_frame() samples proportions without touching the countdown
    - on_second() ticks once and notifies listeners with a fresh snapshot
    - Clock and initialization failures are logged with error_code and re-raised

Design Decisions:
    - FakeClock instead of patching datetime; real engines and real calendar
    - Recording scheduler double to check attach() without an event loop
"""

import logging
from datetime import datetime, timedelta, timezone

import pytest

from memento.config import Settings
from memento.core.domain_types import CountdownState, ExpiryPolicy, Granularity
from memento.core.errors import ClockUnavailableError, PastEndOfLifeError
from memento.services.life_clock import LifeClock

from tests.support.fake_clock import BrokenClock, FakeClock

BIRTH = datetime(1998, 7, 25)
EOL = datetime(2073, 7, 25, tzinfo=timezone.utc)


class RecordingScheduler:
    def __init__(self):
        self.registered: list[tuple[float, object, str, bool]] = []

    def every(self, hz, callback, name="", catch_up=True):
        self.registered.append((hz, callback, name, catch_up))

    def stop(self):
        pass


def _settings(**overrides) -> Settings:
    fields = dict(birth_instant=BIRTH, timezone="UTC", life_expectancy_years=75)
    fields.update(overrides)
    return Settings(**fields)


def _clock_at(seconds_before_end: float) -> FakeClock:
    return FakeClock(EOL - timedelta(seconds=seconds_before_end))


# ─── start / wiring ──────────────────────────────────────────────

def test_from_settings_builds_engines_in_configured_zone():
    life_clock = LifeClock.from_settings(_settings(), _clock_at(100))
    assert life_clock.countdown.end_of_life == EOL
    assert life_clock.grid.weeks_per_year == 52


def test_start_anchors_countdown_to_clock():
    life_clock = LifeClock.from_settings(_settings(), _clock_at(7200))
    breakdown = life_clock.start()
    assert life_clock.countdown.total_seconds_remaining == 7200
    assert breakdown.hours == 2
    assert life_clock.proportions is not None


def test_start_past_end_of_life_clamps_by_default():
    life_clock = LifeClock.from_settings(_settings(), FakeClock(EOL + timedelta(days=3)))
    life_clock.start()
    assert life_clock.countdown.state == CountdownState.EXPIRED
    assert life_clock.snapshot().total_seconds_remaining == 0


def test_start_past_end_of_life_raise_policy_logs_and_raises(caplog):
    life_clock = LifeClock.from_settings(
        _settings(expiry_policy=ExpiryPolicy.RAISE), FakeClock(EOL + timedelta(days=3)),
    )
    with caplog.at_level(logging.ERROR, logger="memento.services.life_clock"):
        with pytest.raises(PastEndOfLifeError):
            life_clock.start()
    assert any(getattr(r, "error_code", None) == "PAST_END_OF_LIFE" for r in caplog.records)


def test_broken_clock_surfaces_clock_unavailable(caplog):
    life_clock = LifeClock.from_settings(_settings(), BrokenClock())
    with caplog.at_level(logging.ERROR, logger="memento.services.life_clock"):
        with pytest.raises(ClockUnavailableError):
            life_clock.start()
    assert any(getattr(r, "error_code", None) == "CLOCK_UNAVAILABLE" for r in caplog.records)


def test_attach_registers_both_cadences():
    life_clock = LifeClock.from_settings(_settings(), _clock_at(100))
    scheduler = RecordingScheduler()
    life_clock.attach(scheduler, 60.0, 1.0)
    assert [(hz, name, catch_up) for hz, _, name, catch_up in scheduler.registered] == [
        (60.0, "proportions", False), (1.0, "countdown", True),
    ]
    assert scheduler.registered[0][1] == life_clock.on_frame
    assert scheduler.registered[1][1] == life_clock.on_second


# ─── callbacks ───────────────────────────────────────────────────

def test_on_frame_samples_without_ticking():
    clock = _clock_at(7200)
    life_clock = LifeClock.from_settings(_settings(), clock)
    life_clock.start()
    clock.advance(timedelta(milliseconds=250))
    proportions = life_clock.on_frame()
    assert proportions.sub_second == pytest.approx(0.25)
    assert life_clock.countdown.total_seconds_remaining == 7200


def test_on_second_ticks_and_notifies_listeners():
    clock = _clock_at(7200)
    life_clock = LifeClock.from_settings(_settings(), clock)
    life_clock.start()
    received = []
    life_clock.subscribe(received.append)

    clock.advance(timedelta(seconds=1))
    breakdown = life_clock.on_second()

    assert breakdown.seconds == 7199
    assert len(received) == 1
    seconds_dial = received[0].dials[-1]
    assert seconds_dial.unit == Granularity.SECONDS
    assert seconds_dial.remaining == 7199


def test_on_second_runs_countdown_into_expiry():
    life_clock = LifeClock.from_settings(_settings(), _clock_at(3))
    life_clock.start()
    for _ in range(5):
        life_clock.on_second()
    assert life_clock.countdown.state == CountdownState.EXPIRED
    assert life_clock.countdown.total_seconds_remaining == 0


# ─── snapshot ────────────────────────────────────────────────────

def test_snapshot_without_grid_by_default():
    life_clock = LifeClock.from_settings(_settings(), FakeClock(datetime(2024, 6, 5, 12, tzinfo=timezone.utc)))
    life_clock.start()
    snap = life_clock.snapshot()
    assert snap.grid is None
    assert snap.state == CountdownState.ACTIVE
    assert [d.unit for d in snap.dials] == list(Granularity)
    assert snap.summary.age_years == 25


def test_snapshot_with_grid_has_one_current_cell():
    life_clock = LifeClock.from_settings(
        _settings(include_grid=True), FakeClock(datetime(2024, 6, 5, 12, tzinfo=timezone.utc)),
    )
    life_clock.start()
    snap = life_clock.snapshot()
    assert len(snap.grid) == 75
    current = [c for row in snap.grid for c in row if c.classification.value == "current"]
    assert [(c.year, c.week) for c in current] == [(26, 23)]


def test_snapshot_round_trips_through_json():
    life_clock = LifeClock.from_settings(_settings(), _clock_at(86_400))
    life_clock.start()
    snap = life_clock.snapshot()
    assert type(snap).model_validate_json(snap.model_dump_json()) == snap
