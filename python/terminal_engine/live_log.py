"""
Live system log feed.

Emits one randomly chosen status message every ``interval`` seconds while
running and keeps the most recent ``max_entries``. Subscribers receive every
new entry through their own asyncio queue.

Example usage:
    feed = LiveLogFeed(scheduler, interval=2.0, max_entries=12)
    queue = feed.subscribe()
    feed.start()
    entry = await queue.get()
    feed.stop()
"""

from __future__ import annotations

import asyncio
import json
import logging
import random
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Iterable

from .content import LOG_MESSAGES
from .scheduling import Scheduler, TimerGroup


__all__ = ["LogLevel", "LiveLogEntry", "LiveLogFeed"]


logger = logging.getLogger(__name__)


class LogLevel(str, Enum):
    """
    Severity label of a live log message.

    Attributes:
        SYSTEM: Platform housekeeping.
        INFO: Routine activity.
        WARN: Something odd that the platform handled.
        SUCCESS: A user-facing win.
    """

    SYSTEM = "SYSTEM"
    INFO = "INFO"
    WARN = "WARN"
    SUCCESS = "SUCCESS"


def _clock_stamp() -> str:
    """Return the current UTC wall clock as HH:MM:SS."""
    return datetime.now(timezone.utc).strftime("%H:%M:%S")


@dataclass
class LiveLogEntry:
    """
    One emitted live log line.

    Attributes:
        sequence: Emission counter, starting at 1 for each feed.
        level: Severity label.
        message: Message text.
        time: UTC wall clock at emission, HH:MM:SS.
    """

    sequence: int
    level: LogLevel
    message: str
    time: str = field(default_factory=_clock_stamp)

    def to_dict(self) -> dict[str, object]:
        return {
            "sequence": self.sequence,
            "level": self.level.value,
            "message": self.message,
            "time": self.time,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


class LiveLogFeed:
    """
    Periodic random log emitter with bounded history and queue subscribers.

    The feed runs on the engine scheduler: each tick emits one entry and
    schedules the next, so ``stop`` only has to cancel the single pending
    tick.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        interval: float = 2.0,
        max_entries: int = 12,
        messages: Iterable[tuple[str, str]] = LOG_MESSAGES,
        rng: random.Random | None = None,
    ) -> None:
        if interval <= 0:
            raise ValueError("Live log interval must be positive")
        if max_entries < 1:
            raise ValueError("Live log history must keep at least one entry")
        self._messages = tuple((LogLevel(level), text) for level, text in messages)
        if not self._messages:
            raise ValueError("Live log feed needs at least one message")
        self._interval = interval
        self._max_entries = max_entries
        self._rng = rng or random.Random()
        self._timers = TimerGroup(scheduler, name="live log ticks")
        self._entries: list[LiveLogEntry] = []
        self._subscribers: list[asyncio.Queue[LiveLogEntry]] = []
        self._running = False
        self._emitted = 0
        logger.debug("LiveLogFeed initialized with %d messages", len(self._messages))

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def entries(self) -> list[LiveLogEntry]:
        """Most recent entries, oldest first."""
        return list(self._entries)

    @property
    def emitted_count(self) -> int:
        return self._emitted

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._timers.schedule(self._interval, self._tick)
        logger.info("Live log feed started (every %.1fs)", self._interval)

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        self._timers.cancel_all()
        logger.info("Live log feed stopped after %d entries", self._emitted)

    def clear(self) -> None:
        self._entries = []

    def subscribe(self, maxsize: int = 100) -> asyncio.Queue[LiveLogEntry]:
        """
        Register a subscriber queue.

        The queue is pre-filled with the current history so a late subscriber
        sees the same window a renderer would. Caller is responsible for
        calling unsubscribe when done.

        Args:
            maxsize: Queue bound. A subscriber that falls behind loses its
                oldest unread entries.
        """
        queue: asyncio.Queue[LiveLogEntry] = asyncio.Queue(maxsize=max(maxsize, self._max_entries))
        for entry in self._entries:
            queue.put_nowait(entry)
        self._subscribers.append(queue)
        logger.debug("New live log subscriber. Total: %d", len(self._subscribers))
        return queue

    def unsubscribe(self, queue: asyncio.Queue[LiveLogEntry]) -> None:
        if queue in self._subscribers:
            self._subscribers.remove(queue)
        logger.debug("Live log subscriber removed. Total: %d", len(self._subscribers))

    def emit(self) -> LiveLogEntry:
        """Emit one random entry now."""
        level, message = self._rng.choice(self._messages)
        self._emitted += 1
        entry = LiveLogEntry(sequence=self._emitted, level=level, message=message)
        self._entries.append(entry)
        if len(self._entries) > self._max_entries:
            self._entries = self._entries[-self._max_entries:]
        for queue in self._subscribers:
            self._deliver(queue, entry)
        logger.debug("Live log #%d [%s] %s", entry.sequence, level.value, message)
        return entry

    def _deliver(self, queue: asyncio.Queue[LiveLogEntry], entry: LiveLogEntry) -> None:
        if queue.full():
            dropped = queue.get_nowait()
            logger.warning("Live log subscriber lagging; dropped entry #%d", dropped.sequence)
        queue.put_nowait(entry)

    def _tick(self) -> None:
        if not self._running:
            return
        self.emit()
        self._timers.schedule(self._interval, self._tick)
