"""
Line-oriented command interpreter.

Normalizes one submitted line, routes it to the quiz while the quiz owns
input, otherwise resolves it against the static command table, appends the
resulting entries and applies the command's side effect.

Last Grunted: 10/19/2026
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from terminal_commands import CommandContext, CommandEffect, CommandResult, lookup_command

from .quiz import QuizStateMachine
from .scheduling import Scheduler, TimerGroup
from .transcript import Transcript


__all__ = ["CommandInterpreter", "normalize_command", "not_found_message"]


logger = logging.getLogger(__name__)


def normalize_command(raw: str) -> str:
    """Trim and case-fold a raw input line."""
    return (raw or "").strip().lower()


def not_found_message(command: str) -> str:
    return f'Command not found: {command}. Try "help".'


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CommandInterpreter:
    """
    Dispatches submitted lines to the quiz or the command table.

    The interpreter writes into the shared terminal transcript and never
    raises out of ``submit``: unknown commands and handler failures become
    OUTPUT entries.

    Example:
        >>> interpreter = CommandInterpreter(transcript, scheduler, quiz, on_exit=shutdown)
        >>> interpreter.submit("help")
        True
        >>> interpreter.submit("   ")
        False
    """

    def __init__(
        self,
        transcript: Transcript,
        scheduler: Scheduler,
        quiz: QuizStateMachine,
        on_exit: Optional[Callable[[], None]] = None,
        exit_delay: float = 2.0,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._transcript = transcript
        self._quiz = quiz
        self._on_exit = on_exit
        self._exit_delay = exit_delay
        self._clock = clock
        self._timers = TimerGroup(scheduler, name="interpreter timers")

        self._input_buffer = ""
        self._exit_pending = False
        self._stats = {
            "submitted": 0,
            "ignored_empty": 0,
            "quiz_inputs": 0,
            "commands_run": 0,
            "not_found": 0,
            "handler_errors": 0,
        }

    @property
    def transcript(self) -> Transcript:
        return self._transcript

    @property
    def input_buffer(self) -> str:
        return self._input_buffer

    @property
    def exit_pending(self) -> bool:
        """True between an ``exit`` shutdown and its deferred exit callback."""
        return self._exit_pending

    @property
    def stats(self) -> dict[str, int]:
        return dict(self._stats)

    def type_input(self, value: str) -> None:
        """Mirror the renderer's input field."""
        self._input_buffer = value

    def submit(self, raw: Optional[str] = None) -> bool:
        """
        Process one line of input.

        Args:
            raw: Line to submit. Defaults to the current input buffer.

        Returns:
            False when the trimmed line is empty and nothing was appended,
            True otherwise.
        """
        line = self._input_buffer if raw is None else raw
        self._input_buffer = line

        command = normalize_command(line)
        if not command:
            self._stats["ignored_empty"] += 1
            return False

        self._stats["submitted"] += 1
        self._transcript.append_input(line)

        if self._quiz.is_active:
            self._stats["quiz_inputs"] += 1
            self._quiz.handle_input(command)
            self._input_buffer = ""
            return True

        spec = lookup_command(command)
        if spec is None:
            self._stats["not_found"] += 1
            logger.debug("Command not found: %r", command)
            self._transcript.append_output(not_found_message(command))
            self._input_buffer = ""
            return True

        context = CommandContext(normalized=command, raw=line, now=self._clock())
        try:
            result = spec.handler(context)
        except Exception as e:
            self._stats["handler_errors"] += 1
            logger.error("Command %s failed: %s", spec.name, e, exc_info=True)
            self._transcript.append_output(f"Error executing command: {e}")
            self._input_buffer = ""
            return True

        self._stats["commands_run"] += 1
        self._apply(spec.name, result)
        self._input_buffer = ""
        return True

    def _apply(self, name: str, result: CommandResult) -> None:
        if result.effect == CommandEffect.CLEAR_TRANSCRIPT:
            self._transcript.clear()
            return

        for block in result.outputs:
            self._transcript.append_output(block)

        if result.effect == CommandEffect.START_QUIZ:
            self._quiz.start()
        elif result.effect == CommandEffect.SHUTDOWN:
            self._input_buffer = ""
            self._schedule_exit()

        logger.debug("Command %s applied (effect=%s)", name, result.effect.value)

    def _schedule_exit(self) -> None:
        if self._exit_pending:
            return
        self._exit_pending = True
        logger.info("Exit requested; handing off in %.1fs", self._exit_delay)
        self._timers.schedule(self._exit_delay, self._fire_exit)

    def _fire_exit(self) -> None:
        self._exit_pending = False
        if self._on_exit is not None:
            self._on_exit()

    def teardown(self) -> None:
        """Cancel the deferred exit, if any."""
        self._timers.cancel_all()
        self._exit_pending = False
