"""
Commands with side effects carried out by the interpreter.
"""

from __future__ import annotations

from terminal_commands.base import CommandContext, CommandEffect, CommandResult
from terminal_commands.content import APPLY_LINES, SHUTDOWN_NOTICE_LINES


def start_quiz(context: CommandContext) -> CommandResult:
    # The quiz writes its own intro block when started.
    return CommandResult(effect=CommandEffect.START_QUIZ)


def apply(context: CommandContext) -> CommandResult:
    return CommandResult.lines(APPLY_LINES)


def clear(context: CommandContext) -> CommandResult:
    return CommandResult(effect=CommandEffect.CLEAR_TRANSCRIPT)


def shutdown(context: CommandContext) -> CommandResult:
    return CommandResult.lines(SHUTDOWN_NOTICE_LINES, effect=CommandEffect.SHUTDOWN)
