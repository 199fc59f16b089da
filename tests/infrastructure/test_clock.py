"""System Clock — tests for aware reads and failure mapping."""

from datetime import timezone
from zoneinfo import ZoneInfo

import pytest

from memento.core.errors import ClockUnavailableError
from memento.infrastructure import clock as clock_module
from memento.infrastructure.clock import SystemClock


def test_now_is_aware_in_configured_zone():
    now = SystemClock(ZoneInfo("Europe/Berlin")).now()
    assert now.tzinfo == ZoneInfo("Europe/Berlin")


def test_now_defaults_to_host_local_aware():
    assert SystemClock().now().tzinfo is not None


def test_host_failure_maps_to_clock_unavailable(monkeypatch):
    class FailingDatetime:
        @staticmethod
        def now(tz=None):
            raise OSError("clock_gettime failed")

    monkeypatch.setattr(clock_module, "datetime", FailingDatetime)
    with pytest.raises(ClockUnavailableError) as exc_info:
        SystemClock(timezone.utc).now()
    assert isinstance(exc_info.value.__cause__, OSError)
    assert exc_info.value.code == "CLOCK_UNAVAILABLE"

