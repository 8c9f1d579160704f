"""
Static command table.
"""

from __future__ import annotations

import logging
from typing import Optional

from terminal_commands import actions, easter_eggs, informational
from terminal_commands.base import CommandCategory, CommandSpec


logger = logging.getLogger(__name__)


def _command_table() -> tuple[CommandSpec, ...]:
    return (
        CommandSpec("help", informational.show_help, "Show available commands", hidden=True),
        CommandSpec("stack", informational.show_stack, "Show tech stack + engineering decisions"),
        CommandSpec("mission", informational.show_mission, "Our vision for the Universal Adapter"),
        CommandSpec("challenges", informational.show_challenges, "Core architectural problems to solve"),
        CommandSpec(
            "culture",
            actions.start_quiz,
            "10-question fit diagnostic (profound)",
            category=CommandCategory.ACTION,
            aliases=("quiz",),
        ),
        CommandSpec("ls", informational.list_files, "Explore the codebase structure"),
        CommandSpec("whoami", informational.whoami, "Your profile + permissions"),
        CommandSpec("sudo", informational.sudo, "Try it (you'll see)"),
        CommandSpec(
            "apply",
            actions.apply,
            "Start your application",
            category=CommandCategory.ACTION,
            aliases=("./apply.sh",),
        ),
        CommandSpec("clear", actions.clear, "Clear terminal history", category=CommandCategory.ACTION),
        CommandSpec(
            "exit",
            actions.shutdown,
            "Shut the system down",
            category=CommandCategory.ACTION,
            hidden=True,
        ),
        CommandSpec(
            "konami",
            easter_eggs.konami,
            category=CommandCategory.EASTER_EGG,
            aliases=("up up down down left right left right b a",),
            hidden=True,
        ),
        CommandSpec("health", easter_eggs.health, category=CommandCategory.EASTER_EGG, hidden=True),
        CommandSpec(
            "salary",
            easter_eggs.matrix,
            category=CommandCategory.EASTER_EGG,
            aliases=("matrix",),
            hidden=True,
        ),
        CommandSpec(
            "hire me",
            easter_eggs.hire_me,
            category=CommandCategory.EASTER_EGG,
            aliases=("hireme",),
            hidden=True,
        ),
    )


def _build_registry(specs: tuple[CommandSpec, ...]) -> tuple[dict[str, CommandSpec], tuple[CommandSpec, ...]]:
    lookup: dict[str, CommandSpec] = {}
    ordered: list[CommandSpec] = []
    for spec in specs:
        added = False
        for key in spec.keys:
            normalized = key.strip().lower()
            if normalized in lookup:
                logger.warning(
                    "Duplicate command key '%s' (%s); keeping %s",
                    normalized,
                    spec.name,
                    lookup[normalized].name,
                )
                continue
            lookup[normalized] = spec
            added = True
        if added:
            ordered.append(spec)
    return lookup, tuple(ordered)


_REGISTRY, _ORDERED = _build_registry(_command_table())


def available_commands() -> tuple[str, ...]:
    """Return every recognized command string, aliases included."""
    return tuple(sorted(_REGISTRY.keys()))


def all_commands() -> tuple[CommandSpec, ...]:
    """Return every command record in table order."""
    return _ORDERED


def visible_commands() -> tuple[CommandSpec, ...]:
    """Return the commands listed by ``help``, in table order."""
    return tuple(spec for spec in _ORDERED if not spec.hidden)


def lookup_command(text: str) -> Optional[CommandSpec]:
    """Exact, case-insensitive, trimmed match; None when unrecognized."""
    return _REGISTRY.get((text or "").strip().lower())


def load_command(name: str) -> CommandSpec:
    """Load a command by name or alias."""
    normalized = (name or "").strip().lower()
    if not normalized:
        raise ValueError("Command name is empty.")

    spec = _REGISTRY.get(normalized)
    if spec is None:
        supported = ", ".join(available_commands())
        raise ValueError(
            f"Unknown command '{name}'. Supported commands: {supported}."
        )
    return spec
