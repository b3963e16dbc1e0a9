"""Periodic refresh scheduling for an open conversation."""

import asyncio
import logging
from typing import Awaitable, Callable, Set


class ChatPollScheduler:
    """
    Runs a tick coroutine at a fixed interval.

    There is at most one timer per scheduler.  Each tick is started as its own task and is
    not awaited by the timer, but no more than `max_outstanding` ticks may be in flight.
    Stopping the timer does not cancel ticks that are already running.
    """

    def __init__(
        self,
        interval_ms: int,
        tick: Callable[[], Awaitable[object]],
        max_outstanding: int = 2
    ) -> None:
        """
        Initialize the scheduler.

        Args:
            interval_ms: Time between ticks in milliseconds
            tick: Coroutine function invoked on each tick
            max_outstanding: Most ticks allowed to be running at once
        """
        self._interval = interval_ms / 1000
        self._tick = tick
        self._max_outstanding = max_outstanding
        self._timer_task: asyncio.Task | None = None
        self._tick_tasks: Set[asyncio.Task] = set()
        self._logger = logging.getLogger("ChatPollScheduler")

    def is_running(self) -> bool:
        """Check if the timer is active."""
        return self._timer_task is not None and not self._timer_task.done()

    def outstanding(self) -> int:
        """Get the number of ticks from the current start still in flight."""
        return len(self._tick_tasks)

    def start(self) -> None:
        """
        Start the timer, replacing any timer that is already running.

        Ticks still in flight from an earlier start are left to finish but no longer
        count against `max_outstanding`.  Must be called with an event loop running.
        """
        self.stop()
        self._tick_tasks = set()
        self._timer_task = asyncio.create_task(self._run(self._tick_tasks))
        self._logger.debug("Polling started (every %.3fs)", self._interval)

    def stop(self) -> None:
        """Cancel the timer.  Safe to call when no timer is running."""
        if self._timer_task is None:
            return

        if not self._timer_task.done():
            self._timer_task.cancel()
            self._logger.debug("Polling stopped")

        self._timer_task = None

    async def _run(self, tick_tasks: Set[asyncio.Task]) -> None:
        while True:
            await asyncio.sleep(self._interval)

            if len(tick_tasks) >= self._max_outstanding:
                self._logger.debug("Skipping poll tick: %d refreshes still in flight", len(tick_tasks))
                continue

            task = asyncio.create_task(self._run_tick())
            tick_tasks.add(task)
            task.add_done_callback(tick_tasks.discard)

    async def _run_tick(self) -> None:
        try:
            await self._tick()

        except Exception:
            self._logger.exception("Unhandled error in poll tick")
