"""
Terminal session orchestrator.

Wires the boot gate, the terminal (transcript, interpreter, quiz), the live
log feed, the shutdown controller and the visit tracker around one
scheduler and one persisted flag store, and exposes the state a renderer
needs.

Usage:
    from terminal_engine import AsyncioScheduler, InMemoryFlagStore, SessionFlags, TerminalSession

    session = TerminalSession(SessionFlags(InMemoryFlagStore()), AsyncioScheduler())
    session.start()
    session.submit_password("SwitchMeUp")
    session.submit("help")
    session.teardown()
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .boot import BootController, PasswordResult
from .content import WELCOME_MESSAGE
from .flags import SessionFlags
from .interpreter import CommandInterpreter
from .live_log import LiveLogFeed
from .quiz import QuizStateMachine
from .scheduling import Scheduler
from .shutdown import ShutdownController
from .transcript import Transcript, TranscriptListener
from .visits import VisitTracker


__all__ = ["SessionView", "SessionSettings", "TerminalSession"]


logger = logging.getLogger(__name__)


# =============================================================================
# Settings
# =============================================================================

class SessionView(str, Enum):
    """Which surface currently owns the screen."""

    BOOT = "boot"
    TERMINAL = "terminal"
    SHUTDOWN = "shutdown"
    OFFLINE = "offline"


@dataclass(frozen=True)
class SessionSettings:
    """Pacing and gate settings for one session."""

    passphrase: str = "SwitchMeUp"
    mask_symbol: str = "*"
    line_delay_min: float = 0.1
    line_delay_span: float = 0.3
    prompt_delay: float = 0.8
    grant_delay: float = 0.6
    error_flash: float = 0.5
    exit_delay: float = 2.0
    welcome_message: str = WELCOME_MESSAGE
    quiz_reveal_delay: float = 0.5
    quiz_high_threshold: int = 8
    quiz_mixed_threshold: int = 6
    shutdown_line_interval: float = 0.4
    live_logs_enabled: bool = True
    live_log_interval: float = 2.0
    live_log_max_entries: int = 12
    visit_announce_delay: float = 1.5


# =============================================================================
# Session
# =============================================================================

class TerminalSession:
    """
    One interactive session from boot to offline.

    The session starts in BOOT (or directly in OFFLINE when the persisted
    shutdown flag is set), moves to TERMINAL once the pass-phrase unlocks it,
    to SHUTDOWN when shutdown is requested, and to OFFLINE when the shutdown
    narrative has finished. ``reboot`` returns to BOOT.
    """

    def __init__(
        self,
        flags: SessionFlags,
        scheduler: Scheduler,
        settings: Optional[SessionSettings] = None,
        rng: random.Random | None = None,
    ) -> None:
        self._flags = flags
        self._scheduler = scheduler
        self.settings = settings or SessionSettings()
        self._rng = rng

        self.boot = BootController(
            scheduler,
            on_unlock=self._on_unlock,
            passphrase=self.settings.passphrase,
            mask_symbol=self.settings.mask_symbol,
            line_delay_min=self.settings.line_delay_min,
            line_delay_span=self.settings.line_delay_span,
            prompt_delay=self.settings.prompt_delay,
            grant_delay=self.settings.grant_delay,
            error_flash=self.settings.error_flash,
            rng=rng,
        )
        self.shutdown = ShutdownController(
            scheduler,
            flags,
            line_interval=self.settings.shutdown_line_interval,
            on_offline=self._on_offline,
        )
        self.live_logs = LiveLogFeed(
            scheduler,
            interval=self.settings.live_log_interval,
            max_entries=self.settings.live_log_max_entries,
            rng=rng,
        )
        self.visits = VisitTracker(
            flags,
            scheduler,
            announce_delay=self.settings.visit_announce_delay,
        )

        self._view = SessionView.BOOT
        self._started = False
        self._transcript_listeners: list[TranscriptListener] = []
        self._build_terminal()

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def view(self) -> SessionView:
        return self._view

    @property
    def flags(self) -> SessionFlags:
        return self._flags

    @property
    def transcript(self) -> Transcript:
        """The terminal transcript (boot lines live on ``boot.transcript``)."""
        return self._transcript

    @property
    def interpreter(self) -> CommandInterpreter:
        return self._interpreter

    @property
    def quiz(self) -> QuizStateMachine:
        return self._quiz

    @property
    def is_unlocked(self) -> bool:
        return self._view == SessionView.TERMINAL

    def add_transcript_listener(self, listener: TranscriptListener) -> None:
        """Subscribe to terminal appends; survives the transcript rebuild on reboot."""
        self._transcript_listeners.append(listener)
        self._transcript.add_listener(listener)

    def remove_transcript_listener(self, listener: TranscriptListener) -> None:
        if listener in self._transcript_listeners:
            self._transcript_listeners.remove(listener)
        self._transcript.remove_listener(listener)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start(self) -> None:
        """Record the visit and open either the boot gate or the offline view."""
        if self._started:
            logger.info("Session already started")
            return
        self._started = True
        self.visits.record_visit()

        if self._flags.is_shutdown:
            self.shutdown.restore_offline()
            self._view = SessionView.OFFLINE
            logger.info("Persisted shutdown flag found; session opens offline")
            return

        self._view = SessionView.BOOT
        self.boot.start()
        logger.info("Session started in boot view")

    def submit_password(self, password: Optional[str] = None) -> PasswordResult:
        if self._view != SessionView.BOOT:
            return PasswordResult.NOT_READY
        return self.boot.submit_password(password)

    def submit(self, raw: Optional[str] = None) -> bool:
        """
        Submit a terminal line.

        Returns:
            False when the terminal is not unlocked or the line is blank.
        """
        if self._view != SessionView.TERMINAL:
            logger.debug("Terminal input ignored in %s view", self._view.value)
            return False
        return self._interpreter.submit(raw)

    def request_shutdown(self) -> bool:
        """
        Persist the shutdown flag, tear the terminal down and start the narrative.

        Returns:
            False if a shutdown is already in progress or complete.
        """
        if self.shutdown.active:
            return False
        self.boot.teardown()
        self._teardown_terminal()
        self._view = SessionView.SHUTDOWN
        return self.shutdown.request_shutdown()

    def reboot(self) -> None:
        """Clear the flag, cancel every timer, rebuild the terminal and boot again."""
        self.boot.teardown()
        self._teardown_terminal()
        self.shutdown.reboot()
        self.live_logs.clear()
        self._build_terminal()
        self._view = SessionView.BOOT
        self._started = True
        self.boot.start()
        logger.info("Session rebooted")

    def teardown(self) -> None:
        """Cancel every outstanding timer of every component."""
        self.boot.teardown()
        self._teardown_terminal()
        self.shutdown.teardown()
        self.visits.teardown()
        logger.info("Session torn down")

    # -------------------------------------------------------------------------
    # Internal Methods
    # -------------------------------------------------------------------------

    def _build_terminal(self) -> None:
        self._transcript = Transcript()
        for listener in self._transcript_listeners:
            self._transcript.add_listener(listener)
        self._transcript.append_system(self.settings.welcome_message)
        self._quiz = QuizStateMachine(
            self._transcript,
            self._scheduler,
            reveal_delay=self.settings.quiz_reveal_delay,
            high_threshold=self.settings.quiz_high_threshold,
            mixed_threshold=self.settings.quiz_mixed_threshold,
        )
        self._interpreter = CommandInterpreter(
            self._transcript,
            self._scheduler,
            self._quiz,
            on_exit=self.request_shutdown,
            exit_delay=self.settings.exit_delay,
        )

    def _teardown_terminal(self) -> None:
        self._interpreter.teardown()
        self._quiz.teardown()
        self.live_logs.stop()

    def _on_unlock(self) -> None:
        if self._view != SessionView.BOOT:
            return
        self._view = SessionView.TERMINAL
        if self.settings.live_logs_enabled:
            self.live_logs.start()
        logger.info("Session unlocked; terminal ready")

    def _on_offline(self) -> None:
        self._view = SessionView.OFFLINE

    # -------------------------------------------------------------------------
    # Status Methods
    # -------------------------------------------------------------------------

    def get_status(self) -> dict:
        """Renderer-facing snapshot of the whole session."""
        visits = self.visits.stats
        return {
            "view": self._view.value,
            "show_password_prompt": self.boot.show_password_prompt,
            "password_error": self.boot.password_error,
            "quiz_active": self._quiz.is_active,
            "quiz_step": self._quiz.step_index,
            "quiz_score": self._quiz.score,
            "exit_pending": self._interpreter.exit_pending,
            "shutdown_phase": self.shutdown.phase,
            "is_shutdown": self._flags.is_shutdown,
            "input_buffer": self._interpreter.input_buffer,
            "transcript_length": len(self._transcript),
            "transcript_generation": self._transcript.generation,
            "last_sequence": self._transcript.last_sequence,
            "live_logs_running": self.live_logs.is_running,
            "visits": {"count": visits.count, "unique_days": visits.unique_days},
        }
