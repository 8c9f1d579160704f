"""
Boot controller: timed kernel narration followed by a pass-phrase gate.

The boot lines play through a ``Sequencer``; its terminal action reveals
the password prompt. A matching pass-phrase echoes a masked copy, prints
``ACCESS GRANTED.`` and unlocks the terminal after ``grant_delay``. A wrong
pass-phrase raises a short-lived error flag and clears the input; retries
are unlimited.

Last Grunted: 10/19/2026
"""

from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Callable, Optional

from .content import (
    ACCESS_DENIED_MESSAGE,
    ACCESS_GRANTED_MESSAGE,
    AUTH_PROMPT_LINES,
    BOOT_LINES,
)
from .models import EntryKind
from .scheduling import Scheduler, TimerGroup
from .sequencer import Sequencer, SequencerScript
from .transcript import Transcript


__all__ = ["BootController", "PasswordResult"]


logger = logging.getLogger(__name__)


class PasswordResult(str, Enum):
    """Outcome of a pass-phrase submission."""

    GRANTED = "granted"
    DENIED = "denied"
    NOT_READY = "not_ready"


class BootController:
    """
    Runs the boot narration and the pass-phrase gate.

    The controller keeps its own transcript: boot lines as SYSTEM entries,
    the masked echo and the grant line as OUTPUT entries.

    Example:
        >>> boot = BootController(scheduler, on_unlock=open_terminal)
        >>> boot.start()
        >>> # ... lines reveal, then the prompt appears ...
        >>> boot.submit_password("SwitchMeUp")
        <PasswordResult.GRANTED: 'granted'>
    """

    def __init__(
        self,
        scheduler: Scheduler,
        on_unlock: Optional[Callable[[], None]] = None,
        passphrase: str = "SwitchMeUp",
        mask_symbol: str = "*",
        line_delay_min: float = 0.1,
        line_delay_span: float = 0.3,
        prompt_delay: float = 0.8,
        grant_delay: float = 0.6,
        error_flash: float = 0.5,
        lines: tuple[str, ...] = BOOT_LINES,
        rng: random.Random | None = None,
    ) -> None:
        self._on_unlock = on_unlock
        self._passphrase = passphrase
        self._mask_symbol = mask_symbol
        self._grant_delay = grant_delay
        self._error_flash = error_flash

        self.transcript = Transcript()
        self._sequencer = Sequencer(
            scheduler,
            SequencerScript(
                lines=tuple(lines),
                delay_min=line_delay_min,
                delay_span=line_delay_span,
                extra_delay=prompt_delay,
            ),
            on_line=self._on_boot_line,
            on_complete=self._on_sequence_complete,
            rng=rng,
            name="boot",
        )
        self._timers = TimerGroup(scheduler, name="boot gate timers")
        self._error_timers = TimerGroup(scheduler, name="boot error flash")

        self._show_password_prompt = False
        self._password_error = False
        self._password_input = ""
        self._granted = False
        self._unlocked = False
        self._failed_attempts = 0

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def sequencer(self) -> Sequencer:
        return self._sequencer

    @property
    def show_password_prompt(self) -> bool:
        return self._show_password_prompt

    @property
    def password_error(self) -> bool:
        """True for ``error_flash`` seconds after a wrong pass-phrase."""
        return self._password_error

    @property
    def password_input(self) -> str:
        return self._password_input

    @property
    def granted(self) -> bool:
        return self._granted

    @property
    def unlocked(self) -> bool:
        return self._unlocked

    @property
    def failed_attempts(self) -> int:
        return self._failed_attempts

    # -------------------------------------------------------------------------
    # Control Methods
    # -------------------------------------------------------------------------

    def start(self) -> None:
        """Start (or restart) the boot narration from a clean slate."""
        self.teardown()
        self.transcript = Transcript()
        self._show_password_prompt = False
        self._password_error = False
        self._password_input = ""
        self._granted = False
        self._unlocked = False
        self._failed_attempts = 0
        self._sequencer.restart()

    def type_password(self, value: str) -> None:
        """Mirror the renderer's password field."""
        self._password_input = value

    def submit_password(self, password: Optional[str] = None) -> PasswordResult:
        """
        Check a pass-phrase against the configured one.

        Args:
            password: Candidate pass-phrase. Defaults to the typed input.

        Returns:
            GRANTED on an exact, case-sensitive match; DENIED otherwise;
            NOT_READY before the prompt is shown or after access is granted.
        """
        candidate = self._password_input if password is None else password
        if not self._show_password_prompt or self._granted:
            logger.debug("Password submitted while gate not accepting input")
            return PasswordResult.NOT_READY

        if candidate == self._passphrase:
            self._granted = True
            self._password_error = False
            self._error_timers.cancel_all()
            self._password_input = ""
            self.transcript.append_output(f"[PASSWORD] {self._mask_symbol * len(candidate)}")
            self.transcript.append_output(ACCESS_GRANTED_MESSAGE)
            self._timers.schedule(self._grant_delay, self._unlock)
            logger.info("Boot access granted")
            return PasswordResult.GRANTED

        self._failed_attempts += 1
        self._password_error = True
        self._password_input = ""
        self._error_timers.cancel_all()
        self._error_timers.schedule(self._error_flash, self._clear_error)
        logger.info("Boot access denied (attempt %d)", self._failed_attempts)
        return PasswordResult.DENIED

    def prompt_lines(self) -> list[str]:
        """Prompt text for renderers; empty until the prompt is shown."""
        if not self._show_password_prompt:
            return []
        lines = list(AUTH_PROMPT_LINES)
        if self._password_error:
            lines.append(ACCESS_DENIED_MESSAGE)
        return lines

    def teardown(self) -> None:
        """Cancel narration, prompt reveal, error flash and pending unlock."""
        self._sequencer.cancel()
        self._timers.cancel_all()
        self._error_timers.cancel_all()

    # -------------------------------------------------------------------------
    # Internal Methods
    # -------------------------------------------------------------------------

    def _on_boot_line(self, index: int, line: str) -> None:
        self.transcript.append(EntryKind.SYSTEM, line)

    def _on_sequence_complete(self) -> None:
        self._show_password_prompt = True
        logger.info("Boot narration complete; awaiting pass-phrase")

    def _clear_error(self) -> None:
        self._password_error = False

    def _unlock(self) -> None:
        if self._unlocked:
            return
        self._unlocked = True
        logger.info("Terminal unlocked")
        if self._on_unlock is not None:
            self._on_unlock()

    def get_status(self) -> dict:
        return {
            "sequence": self._sequencer.get_status(),
            "show_password_prompt": self._show_password_prompt,
            "password_error": self._password_error,
            "granted": self._granted,
            "unlocked": self._unlocked,
            "failed_attempts": self._failed_attempts,
        }
