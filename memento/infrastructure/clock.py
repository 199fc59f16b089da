"""System Clock — the only place the host wall clock is read.

Invariants:
    - now() always returns an aware datetime in the configured zone
    - Any host failure surfaces as ClockUnavailableError, chained to the original exception
"""

import logging
from datetime import datetime, timezone, tzinfo

from memento.core.errors import ClockUnavailableError, ErrorContext

logger = logging.getLogger(__name__)


class SystemClock:
    """ClockLike backed by datetime.now()."""

    def __init__(self, tz: tzinfo | None = None):
        self._tz = tz

    def now(self) -> datetime:
        try:
            if self._tz is None:
                return datetime.now(timezone.utc).astimezone()
            return datetime.now(self._tz)
        except (OSError, OverflowError, ValueError) as exc:
            logger.error(
                "Host clock read failed: %s", exc,
                extra={"component": "clock", "error_code": "CLOCK_UNAVAILABLE"},
            )
            raise ClockUnavailableError(
                str(exc), ErrorContext(component="clock", operation="now"),
            ) from exc
