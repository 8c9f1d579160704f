"""
Command record types shared by the command table and the interpreter.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Iterable


class CommandEffect(str, Enum):
    """Side effect the interpreter performs after appending a command's output."""

    NONE = "none"
    CLEAR_TRANSCRIPT = "clear_transcript"
    START_QUIZ = "start_quiz"
    SHUTDOWN = "shutdown"


class CommandCategory(str, Enum):
    """Grouping used by listings."""

    INFORMATIONAL = "informational"
    ACTION = "action"
    EASTER_EGG = "easter_egg"


@dataclass(frozen=True)
class CommandResult:
    """Output blocks (one transcript entry each) plus one effect."""

    outputs: tuple[str, ...] = ()
    effect: CommandEffect = CommandEffect.NONE

    @classmethod
    def lines(cls, lines: Iterable[str], effect: CommandEffect = CommandEffect.NONE) -> "CommandResult":
        """Build a result with a single block made of ``lines``."""
        return cls(outputs=("\n".join(lines),), effect=effect)


@dataclass(frozen=True)
class CommandContext:
    """What a handler gets to see about the submission."""

    normalized: str
    raw: str
    now: datetime


CommandHandler = Callable[[CommandContext], CommandResult]


@dataclass(frozen=True)
class CommandSpec:
    """One entry in the command table."""

    name: str
    handler: CommandHandler
    description: str = ""
    category: CommandCategory = CommandCategory.INFORMATIONAL
    aliases: tuple[str, ...] = field(default_factory=tuple)
    hidden: bool = False

    @property
    def keys(self) -> tuple[str, ...]:
        """Every normalized string that resolves to this command."""
        return (self.name, *self.aliases)
