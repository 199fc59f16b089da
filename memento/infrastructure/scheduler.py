"""Asyncio Scheduler — host-provided periodic trigger for the two engine cadences.

Invariants:
    - Each registered callback runs on its own fixed-rate schedule (hz calls per second)
    - Late calls of a catch-up job run back to back, so a 1 Hz tick count tracks wall time
    - Jobs registered with catch_up=False skip missed calls and resume from the current time
    - A late job still yields to the loop between calls, so stop() and other jobs keep running
    - stop() ends every schedule at its next wake-up; run() returns once all have ended
    - An exception from a callback stops the scheduler and propagates out of run()

Design Decisions:
    - Single-threaded cooperative model: callbacks are synchronous and never await,
      so the countdown counter is never read mid-write
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger(__name__)


@dataclass
class PeriodicJob:
    hz: float
    callback: Callable[[], object]
    name: str
    catch_up: bool = True
    calls: int = 0

    @property
    def interval(self) -> float:
        return 1.0 / self.hz


class AsyncioScheduler:
    """SchedulerLike on top of the running asyncio loop."""

    def __init__(self):
        self._jobs: list[PeriodicJob] = []
        self._stopped = asyncio.Event()

    @property
    def jobs(self) -> list[PeriodicJob]:
        return list(self._jobs)

    def every(
        self,
        hz: float,
        callback: Callable[[], object],
        name: str = "",
        catch_up: bool = True,
    ) -> None:
        if hz <= 0:
            raise ValueError(f"hz must be positive, got {hz}")
        self._jobs.append(PeriodicJob(
            hz, callback, name or getattr(callback, "__name__", "job"), catch_up,
        ))

    def stop(self) -> None:
        self._stopped.set()

    async def _periodic(self, job: PeriodicJob) -> None:
        loop = asyncio.get_running_loop()
        next_at = loop.time() + job.interval
        while not self._stopped.is_set():
            delay = next_at - loop.time()
            if delay > 0:
                try:
                    await asyncio.wait_for(self._stopped.wait(), timeout=delay)
                    return
                except asyncio.TimeoutError:
                    pass
            else:
                await asyncio.sleep(0)
                if self._stopped.is_set():
                    return
            job.callback()
            job.calls += 1
            next_at += job.interval
            if not job.catch_up:
                next_at = max(next_at, loop.time())

    async def _stop_after(self, duration: float | None) -> None:
        if duration is None:
            await self._stopped.wait()
            return
        try:
            await asyncio.wait_for(self._stopped.wait(), timeout=duration)
        except asyncio.TimeoutError:
            self.stop()

    async def run(self, duration: float | None = None) -> None:
        """Drive all jobs until stop(), `duration` seconds, or a callback failure."""
        self._stopped.clear()
        for job in self._jobs:
            logger.info(
                "Scheduling %s", job.name,
                extra={"component": "scheduler", "callback": job.name, "hz": job.hz},
            )
        tasks = [asyncio.create_task(self._periodic(job)) for job in self._jobs]
        stopper = asyncio.create_task(self._stop_after(duration))
        try:
            done, _ = await asyncio.wait(
                [*tasks, stopper], return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            self.stop()
            for task in (*tasks, stopper):
                task.cancel()
            await asyncio.gather(*tasks, stopper, return_exceptions=True)

        for task in done:
            if not task.cancelled() and task.exception() is not None:
                raise task.exception()
