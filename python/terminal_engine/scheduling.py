"""
Timer scheduling for the terminal engine.

Every delay in the engine is a scheduled callback on a single event loop,
never a blocking wait. Components own a ``TimerGroup`` so that teardown can
cancel exactly the handles that component created.

Last Grunted: 10/19/2026
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Protocol


__all__ = ["TimerHandle", "Scheduler", "AsyncioScheduler", "TimerGroup"]


logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    """Handle returned by a scheduler; asyncio.TimerHandle satisfies it."""

    def cancel(self) -> None:
        ...

    def cancelled(self) -> bool:
        ...


class Scheduler(Protocol):
    """Schedules a zero-argument callback after a delay in seconds."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        ...


class AsyncioScheduler:
    """
    Scheduler backed by the running asyncio event loop.

    The loop is resolved lazily so the scheduler can be constructed
    outside of a running loop and used once one is running.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(max(0.0, delay), callback)


class TimerGroup:
    """
    Tracks the pending timers of one component.

    A handle is dropped from the group as soon as its callback runs, so
    ``pending_count`` only counts timers that can still fire.

    Example:
        >>> group = TimerGroup(scheduler)
        >>> group.schedule(0.5, reveal_next_question)
        >>> group.cancel_all()  # nothing fires afterwards
    """

    def __init__(self, scheduler: Scheduler, name: str = "timers") -> None:
        self._scheduler = scheduler
        self._name = name
        self._handles: set[TimerHandle] = set()

    @property
    def pending_count(self) -> int:
        return len(self._handles)

    def schedule(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Schedule ``callback`` after ``delay`` seconds and track its handle."""
        handle: TimerHandle | None = None

        def _fire() -> None:
            if handle is not None:
                self._handles.discard(handle)
            callback()

        handle = self._scheduler.call_later(delay, _fire)
        self._handles.add(handle)
        return handle

    def cancel_all(self) -> int:
        """Cancel every pending timer. Returns how many were cancelled."""
        count = len(self._handles)
        for handle in self._handles:
            handle.cancel()
        self._handles.clear()
        if count:
            logger.debug("Cancelled %d pending %s", count, self._name)
        return count
