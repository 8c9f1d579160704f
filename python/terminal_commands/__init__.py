"""
Terminal command table entrypoints.
"""

from terminal_commands.base import (
    CommandCategory,
    CommandContext,
    CommandEffect,
    CommandResult,
    CommandSpec,
)
from terminal_commands.registry import (
    all_commands,
    available_commands,
    load_command,
    lookup_command,
    visible_commands,
)

__all__ = [
    "CommandCategory",
    "CommandContext",
    "CommandEffect",
    "CommandResult",
    "CommandSpec",
    "all_commands",
    "available_commands",
    "load_command",
    "lookup_command",
    "visible_commands",
]
