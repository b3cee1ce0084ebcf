"""Repeating timers that drive the session."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable

logger = logging.getLogger(__name__)


class TimerHandle(ABC):
    """A repeating timer that can be cancelled."""

    period: float

    @property
    @abstractmethod
    def active(self) -> bool:
        ...

    @abstractmethod
    def cancel(self) -> None:
        ...


class Clock(ABC):
    """Source of repeating timers."""

    @abstractmethod
    def call_every(
        self, period: float, callback: Callable[[], None],
    ) -> TimerHandle:
        ...


class AsyncioTimer(TimerHandle):
    """Timer backed by a task on the running event loop."""

    def __init__(self, period: float, callback: Callable[[], None]) -> None:
        self.period = period
        self._callback = callback
        self._cancelled = False
        self._task = asyncio.get_running_loop().create_task(self._run())

    @property
    def active(self) -> bool:
        return not self._cancelled and not self._task.done()

    def cancel(self) -> None:
        # The callback may cancel its own timer; the flag stops the loop
        # before the next sleep even if the task is mid-callback.
        self._cancelled = True
        if not self._task.done():
            self._task.cancel()

    async def _run(self) -> None:
        try:
            while not self._cancelled:
                await asyncio.sleep(self.period)
                if self._cancelled:
                    break
                self._callback()
        except asyncio.CancelledError:
            pass
        except Exception:
            logger.exception("Timer callback failed; stopping timer.")
            self._cancelled = True


class AsyncioClock(Clock):
    """Clock for use inside a running asyncio event loop."""

    def call_every(
        self, period: float, callback: Callable[[], None],
    ) -> TimerHandle:
        if period <= 0:
            raise ValueError("period must be positive.")
        return AsyncioTimer(period, callback)


class ManualTimer(TimerHandle):
    """Timer that only fires when its :class:`ManualClock` is advanced."""

    def __init__(self, period: float, callback: Callable[[], None]) -> None:
        self.period = period
        self.callback = callback
        self.due = period
        self._cancelled = False

    @property
    def active(self) -> bool:
        return not self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


class ManualClock(Clock):
    """Deterministic clock for headless runs and tests.

    Time only moves when :meth:`advance` is called; due timers fire in
    deadline order.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self.timers: list[ManualTimer] = []

    def call_every(
        self, period: float, callback: Callable[[], None],
    ) -> TimerHandle:
        if period <= 0:
            raise ValueError("period must be positive.")
        timer = ManualTimer(period, callback)
        timer.due = self.now + period
        self.timers.append(timer)
        return timer

    @property
    def active_timers(self) -> list[ManualTimer]:
        return [t for t in self.timers if t.active]

    def _fire(self, timer: ManualTimer) -> None:
        self.now = timer.due
        timer.due += timer.period
        timer.callback()

    def run_next(self) -> bool:
        """Jump to the earliest deadline and fire that timer only."""
        active = self.active_timers
        if not active:
            return False
        self._fire(min(active, key=lambda t: t.due))
        self.timers = self.active_timers
        return True

    def advance(self, seconds: float) -> int:
        """Move time forward, firing due timers. Returns the fire count."""
        deadline = self.now + seconds
        fired = 0
        while True:
            pending = [t for t in self.active_timers if t.due <= deadline]
            if not pending:
                break
            self._fire(min(pending, key=lambda t: t.due))
            fired += 1
        self.now = deadline
        self.timers = self.active_timers
        return fired
