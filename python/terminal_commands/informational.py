"""
Informational commands: pure output, no side effects.
"""

from __future__ import annotations

from terminal_commands.base import CommandContext, CommandResult
from terminal_commands.content import (
    CHALLENGES_LINES,
    HELP_HEADER,
    HELP_HINT,
    LS_LINES,
    MISSION_LINES,
    STACK_LINES,
    SUDO_LINES,
    WHOAMI_BODY_LINES,
    WHOAMI_HEADER_LINES,
)


HELP_NAME_WIDTH = 12


def show_help(context: CommandContext) -> CommandResult:
    """List visible commands in table order, then the hidden-command hint."""
    # Imported here: the registry imports this module to build the table.
    from terminal_commands.registry import visible_commands

    lines = [HELP_HEADER]
    for spec in visible_commands():
        lines.append(f"  {spec.name.ljust(HELP_NAME_WIDTH)}{spec.description}")
    lines.append(HELP_HINT)
    return CommandResult.lines(lines)


def show_stack(context: CommandContext) -> CommandResult:
    return CommandResult.lines(STACK_LINES)


def show_mission(context: CommandContext) -> CommandResult:
    return CommandResult.lines(MISSION_LINES)


def show_challenges(context: CommandContext) -> CommandResult:
    return CommandResult.lines(CHALLENGES_LINES)


def list_files(context: CommandContext) -> CommandResult:
    return CommandResult.lines(LS_LINES)


def whoami(context: CommandContext) -> CommandResult:
    """Profile block stamped with the submission time."""
    stamp = context.now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return CommandResult.lines([*WHOAMI_HEADER_LINES, f"SESSION_START: {stamp}", *WHOAMI_BODY_LINES])


def sudo(context: CommandContext) -> CommandResult:
    return CommandResult.lines(SUDO_LINES)
