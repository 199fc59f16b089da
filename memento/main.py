"""Memento Process — entry point that runs the life clock and emits one JSON frame per second.

Invariants:
    - Settings loaded once via get_settings(); logging set up before any engine is built
    - Snapshots go to stdout as JSON lines; logs go to stderr
    - MementoError exits with status 1 after being logged; Ctrl-C exits cleanly with 0

Design Decisions:
    - The renderer is an external collaborator; stdout JSON lines are its whole contract
"""

import asyncio
import logging
import sys

from memento.config import Settings, get_settings
from memento.core.errors import MementoError
from memento.infrastructure.observability import setup_logging
from memento.infrastructure.scheduler import AsyncioScheduler
from memento.schemas.snapshot import LifeClockSnapshot
from memento.services.life_clock import LifeClock

logger = logging.getLogger(__name__)


def emit(snapshot: LifeClockSnapshot) -> None:
    sys.stdout.write(snapshot.model_dump_json() + "\n")
    sys.stdout.flush()


async def run(settings: Settings, life_clock: LifeClock | None = None) -> LifeClock:
    """Start the clock, attach both cadences, and drive them until stopped."""
    life_clock = life_clock or LifeClock.from_settings(settings)
    life_clock.start()
    life_clock.subscribe(emit)
    emit(life_clock.snapshot())

    scheduler = AsyncioScheduler()
    life_clock.attach(scheduler, settings.proportion_hz, settings.countdown_hz)
    await scheduler.run(settings.run_seconds)
    logger.info(
        "Life clock stopped",
        extra={
            "component": "main",
            "state": life_clock.countdown.state.value,
            "total_seconds_remaining": life_clock.countdown.total_seconds_remaining,
        },
    )
    return life_clock


def main() -> int:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    try:
        asyncio.run(run(settings))
    except MementoError as exc:
        logger.error(
            f"MementoError: {exc.message}",
            extra={"error_code": exc.code, "component": "main"},
        )
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted", extra={"component": "main"})
    return 0


if __name__ == "__main__":
    sys.exit(main())
