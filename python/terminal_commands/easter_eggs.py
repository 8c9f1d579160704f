"""
Hidden commands. They are absent from ``help`` but otherwise ordinary.
"""

from __future__ import annotations

from terminal_commands.base import CommandContext, CommandResult
from terminal_commands.content import HEALTH_LINES, HIRE_ME_LINES, KONAMI_LINES, MATRIX_LINES


def konami(context: CommandContext) -> CommandResult:
    return CommandResult.lines(KONAMI_LINES)


def health(context: CommandContext) -> CommandResult:
    return CommandResult.lines(HEALTH_LINES)


def matrix(context: CommandContext) -> CommandResult:
    return CommandResult.lines(MATRIX_LINES)


def hire_me(context: CommandContext) -> CommandResult:
    return CommandResult.lines(HIRE_ME_LINES)
