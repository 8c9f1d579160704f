"""
Test doubles and fixture data for terminal engine tests.

ManualScheduler replaces the event loop with a virtual clock so timed
reveals, grant delays and live log ticks can be stepped deterministically.

Last Grunted: 10/19/2026
"""

from __future__ import annotations

import itertools
import random
from typing import Callable, Optional

from terminal_engine import (
    AnswerOption,
    InMemoryFlagStore,
    QuizQuestion,
    SessionFlags,
    SessionSettings,
    TerminalSession,
)


# =============================================================================
# Manual Scheduler
# =============================================================================

class ManualHandle:
    """Timer handle for ManualScheduler."""

    def __init__(self, when: float, order: int, callback: Callable[[], None]) -> None:
        self.when = when
        self.order = order
        self.callback = callback
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    def cancelled(self) -> bool:
        return self._cancelled


class ManualScheduler:
    """
    Virtual-clock scheduler.

    Callbacks fire in deadline order, ties in scheduling order. Callbacks
    scheduled while advancing fire in the same ``advance`` call if their
    deadline falls inside the window.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self._handles: list[ManualHandle] = []
        self._counter = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle(self.now + max(0.0, delay), next(self._counter), callback)
        self._handles.append(handle)
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for handle in self._handles if not handle.cancelled())

    def advance(self, seconds: float) -> None:
        """Move the clock forward, firing every due callback."""
        target = self.now + seconds
        while True:
            due = [h for h in self._handles if not h.cancelled() and h.when <= target + 1e-9]
            if not due:
                break
            handle = min(due, key=lambda h: (h.when, h.order))
            self._handles.remove(handle)
            self.now = max(self.now, handle.when)
            handle.callback()
        self.now = target
        self._handles = [h for h in self._handles if not h.cancelled()]

    def run_all(self, limit: float = 60.0) -> None:
        """Advance until nothing is pending or ``limit`` seconds have passed."""
        self.advance(limit)


# =============================================================================
# Fixture Data
# =============================================================================

SAMPLE_QUESTIONS: tuple[QuizQuestion, ...] = (
    QuizQuestion(
        question_id=1,
        prompt="Tabs or spaces?",
        option_a="Tabs",
        option_b="Spaces",
        correct_option=AnswerOption.B,
        feedback_on_correct="Aligned.",
        feedback_on_incorrect="Noted.",
    ),
    QuizQuestion(
        question_id=2,
        prompt="Ship on Friday?",
        option_a="Never",
        option_b="Behind a flag",
        correct_option=AnswerOption.B,
        feedback_on_correct="Brave and careful.",
        feedback_on_incorrect="Safe choice.",
    ),
)

FAST_SETTINGS = SessionSettings(
    line_delay_min=0.1,
    line_delay_span=0.0,
    prompt_delay=0.8,
    grant_delay=0.6,
    error_flash=0.5,
    exit_delay=2.0,
    quiz_reveal_delay=0.5,
    shutdown_line_interval=0.4,
    live_log_interval=2.0,
    visit_announce_delay=1.5,
)

# 8 boot lines at 0.1s each, then the 0.8s prompt delay.
BOOT_PROMPT_AT = 8 * 0.1 + 0.8


def make_session(
    store: Optional[InMemoryFlagStore] = None,
    settings: SessionSettings = FAST_SETTINGS,
) -> tuple[TerminalSession, ManualScheduler, InMemoryFlagStore]:
    """Build a session on a manual scheduler with a seeded rng."""
    scheduler = ManualScheduler()
    store = store if store is not None else InMemoryFlagStore()
    session = TerminalSession(
        SessionFlags(store),
        scheduler,
        settings=settings,
        rng=random.Random(7),
    )
    return session, scheduler, store


def unlocked_session(
    store: Optional[InMemoryFlagStore] = None,
    settings: SessionSettings = FAST_SETTINGS,
) -> tuple[TerminalSession, ManualScheduler, InMemoryFlagStore]:
    """Build, start and unlock a session; the terminal view is active on return."""
    session, scheduler, store = make_session(store, settings)
    session.start()
    scheduler.advance(BOOT_PROMPT_AT + 0.01)
    session.submit_password(settings.passphrase)
    scheduler.advance(settings.grant_delay + 0.01)
    return session, scheduler, store
