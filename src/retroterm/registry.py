# RetroTerm — Retro-Styled Terminal Command Widget
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Command registry.

Owns the name/alias -> Command table, parses raw input lines into a
command name plus arguments, and dispatches.

Collision policy: registering a name or alias that already exists
silently replaces the previous mapping (last registration wins).
"""

from __future__ import annotations

from .interfaces import Command
from .utils import split_command_line


class CommandRegistry:
    """Name/alias lookup table and dispatcher."""

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}

    def register(self, command: Command) -> None:
        """Register a command under its name and every alias (lowercased)."""
        self._commands[command.name.lower()] = command
        for alias in command.aliases:
            self._commands[alias.lower()] = command

    def get(self, name: str) -> Command | None:
        """Look up a command by name or alias, case-insensitively."""
        if not name:
            return None
        return self._commands.get(name.lower())

    def names(self) -> list[str]:
        """Every registered key (names and aliases), sorted."""
        return sorted(self._commands)

    def list_commands(self) -> list[Command]:
        """Distinct registered commands, sorted by name.

        Commands fully shadowed by later registrations are not listed.
        """
        distinct: dict[int, Command] = {}
        for cmd in self._commands.values():
            distinct.setdefault(id(cmd), cmd)
        return sorted(distinct.values(), key=lambda c: c.name.lower())

    def dispatch(self, line: str) -> bool:
        """Execute the command named by the first token of ``line``.

        Returns:
            True if a command was found and executed, False for an empty
            line or an unknown command. Unknown commands are reported by
            the caller, never raised here.
        """
        parts = split_command_line(line)
        if not parts:
            return False

        command = self._commands.get(parts[0].lower())
        if command is None:
            return False

        command.execute(parts[1:])
        return True

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._commands

    def __len__(self) -> int:
        return len(self._commands)
