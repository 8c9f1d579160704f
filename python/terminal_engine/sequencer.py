"""
Timed line sequencer for boot and shutdown narration.

Plays an ordered list of text lines with randomized cumulative delays,
then invokes a terminal action exactly once after an optional extra delay.
Every pending reveal is a tracked timer so that ``cancel`` guarantees no
further line fires.

Usage:
    from terminal_engine.sequencer import Sequencer, SequencerScript

    script = SequencerScript(lines=BOOT_LINES, delay_min=0.1, delay_span=0.3, extra_delay=0.8)
    sequencer = Sequencer(scheduler, script, on_line=show_line, on_complete=show_prompt)
    sequencer.start()
    sequencer.cancel()   # Teardown: nothing fires afterwards
    sequencer.restart()  # Fresh run with new random delays
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from .scheduling import Scheduler, TimerGroup


__all__ = [
    "SequencerState",
    "SequencerScript",
    "Sequencer",
    "calculate_delay",
    "build_schedule",
]


logger = logging.getLogger(__name__)


# =============================================================================
# Script and State
# =============================================================================

class SequencerState(str, Enum):
    """Sequencer state enumeration"""
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class SequencerScript:
    """
    Lines to reveal plus pacing.

    Each line's increment is drawn uniformly from
    ``[delay_min, delay_min + delay_span)``. With ``reveal_first_immediately``
    the first line fires at time zero and later lines still accumulate.
    """
    lines: tuple[str, ...]
    delay_min: float
    delay_span: float = 0.0
    extra_delay: float = 0.0
    reveal_first_immediately: bool = False

    def __post_init__(self) -> None:
        if self.delay_min < 0 or self.delay_span < 0 or self.extra_delay < 0:
            raise ValueError("Sequencer delays must be non-negative")


# =============================================================================
# Delay Calculation
# =============================================================================

def calculate_delay(delay_min: float, delay_span: float, rng: random.Random | None = None) -> float:
    """Draw one line increment from ``[delay_min, delay_min + delay_span)``."""
    if delay_span <= 0:
        return delay_min
    source = rng or random
    return delay_min + source.random() * delay_span


def build_schedule(script: SequencerScript, rng: random.Random | None = None) -> list[float]:
    """
    Return the absolute fire time of every line, cumulative and non-decreasing.
    """
    fire_times: list[float] = []
    elapsed = 0.0
    for index in range(len(script.lines)):
        if not (index == 0 and script.reveal_first_immediately):
            elapsed += calculate_delay(script.delay_min, script.delay_span, rng)
        fire_times.append(elapsed)
    return fire_times


# =============================================================================
# Sequencer
# =============================================================================

class Sequencer:
    """
    Cancellable timed reveal of a fixed line list.

    Produces exactly one ``on_line(index, line)`` call per line in source
    order, then one ``on_complete()`` call ``extra_delay`` seconds after the
    last line. Every pending callback lives on a private timer group.

    Usage:
        sequencer = Sequencer(scheduler, script, on_line=..., on_complete=...)
        sequencer.start()    # Fresh run
        sequencer.cancel()   # Stop; pending lines never fire
        sequencer.restart()  # Cancel and start over
    """

    def __init__(
        self,
        scheduler: Scheduler,
        script: SequencerScript,
        on_line: Optional[Callable[[int, str], None]] = None,
        on_complete: Optional[Callable[[], None]] = None,
        rng: random.Random | None = None,
        name: str = "sequencer",
    ):
        self.script = script
        self.name = name
        self._on_line = on_line
        self._on_complete = on_complete
        self._rng = rng

        # State
        self._state = SequencerState.IDLE
        self._revealed: list[str] = []
        self._fire_times: list[float] = []
        self._timers = TimerGroup(scheduler, name=f"{name} timers")

        logger.debug("Sequencer %s initialized with %d lines", name, len(script.lines))

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def state(self) -> SequencerState:
        """Current sequencer state"""
        return self._state

    @property
    def is_running(self) -> bool:
        """Whether lines or the terminal action are still pending"""
        return self._state == SequencerState.RUNNING

    @property
    def is_completed(self) -> bool:
        """Whether the terminal action has run"""
        return self._state == SequencerState.COMPLETED

    @property
    def revealed_lines(self) -> list[str]:
        """Lines revealed so far in this run"""
        return list(self._revealed)

    @property
    def fire_times(self) -> list[float]:
        """Planned absolute fire times for this run"""
        return list(self._fire_times)

    @property
    def progress(self) -> tuple[int, int]:
        """Current progress as (revealed, total) tuple"""
        return (len(self._revealed), len(self.script.lines))

    @property
    def pending_timers(self) -> int:
        return self._timers.pending_count

    # -------------------------------------------------------------------------
    # Control Methods
    # -------------------------------------------------------------------------

    def start(self) -> None:
        """
        Start a fresh run.

        If RUNNING: no-op.
        Otherwise: resets revealed lines and schedules every line plus the
        terminal action.
        """
        if self._state == SequencerState.RUNNING:
            logger.info("Sequencer %s already running", self.name)
            return

        self._revealed = []
        self._fire_times = build_schedule(self.script, self._rng)
        self._state = SequencerState.RUNNING

        for index, (line, fire_at) in enumerate(zip(self.script.lines, self._fire_times)):
            self._timers.schedule(fire_at, self._make_reveal(index, line))

        # With lines present the terminal action is chained off the last reveal.
        if not self.script.lines:
            self._timers.schedule(self.script.extra_delay, self._complete)

        last_fire = self._fire_times[-1] if self._fire_times else 0.0

        logger.info(
            "Sequencer %s started: %d lines over %.2fs (+%.2fs)",
            self.name,
            len(self.script.lines),
            last_fire,
            self.script.extra_delay,
        )

    def cancel(self) -> None:
        """Cancel every pending reveal and the terminal action."""
        cancelled = self._timers.cancel_all()
        if self._state == SequencerState.RUNNING:
            self._state = SequencerState.CANCELLED
            logger.info(
                "Sequencer %s cancelled after %d/%d lines (%d timers dropped)",
                self.name,
                len(self._revealed),
                len(self.script.lines),
                cancelled,
            )

    def restart(self) -> None:
        """Cancel any current run and start over."""
        self.cancel()
        self._state = SequencerState.IDLE
        self.start()

    # -------------------------------------------------------------------------
    # Internal Methods
    # -------------------------------------------------------------------------

    def _make_reveal(self, index: int, line: str) -> Callable[[], None]:
        def _reveal() -> None:
            if self._state != SequencerState.RUNNING:
                return
            self._revealed.append(line)
            logger.debug("[%s %d/%d] %s", self.name, index + 1, len(self.script.lines), line)
            if self._on_line is not None:
                self._on_line(index, line)
            if index == len(self.script.lines) - 1 and self._state == SequencerState.RUNNING:
                self._timers.schedule(self.script.extra_delay, self._complete)

        return _reveal

    def _complete(self) -> None:
        if self._state != SequencerState.RUNNING:
            return
        self._state = SequencerState.COMPLETED
        logger.info("Sequencer %s completed", self.name)
        if self._on_complete is not None:
            self._on_complete()

    # -------------------------------------------------------------------------
    # Status Methods
    # -------------------------------------------------------------------------

    def get_status(self) -> dict:
        """Get current sequencer status as a dictionary."""
        revealed, total = self.progress
        return {
            "name": self.name,
            "state": self._state.value,
            "is_running": self._state == SequencerState.RUNNING,
            "is_completed": self._state == SequencerState.COMPLETED,
            "revealed": revealed,
            "total_lines": total,
            "progress_pct": round(revealed / total * 100, 1) if total else 100.0,
            "pending_timers": self._timers.pending_count,
        }
