# RetroTerm — Retro-Styled Terminal Command Widget
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Built-in terminal commands.

Each command depends only on the narrow collaborators it needs:
- a TerminalSink for output
- a ColorApplier (color)
- an OverlayHost (menu, panels)
- the CommandRegistry itself (help)

User errors (bad arguments, missing arguments) are reported through the
sink; commands return normally.
"""

from __future__ import annotations

import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from .config import TERMINAL_COLORS
from .interfaces import ColorApplier, Command, OverlayHost, TerminalSink
from .registry import CommandRegistry
from .utils import rule

RPS_CHOICES: tuple[str, ...] = ("rock", "paper", "scissors")

RPS_ALIASES: dict[str, str] = {
    "r": "rock",
    "rock": "rock",
    "p": "paper",
    "paper": "paper",
    "s": "scissors",
    "scissors": "scissors",
}

# winner -> loser
RPS_BEATS: dict[str, str] = {
    "rock": "scissors",
    "paper": "rock",
    "scissors": "paper",
}


@dataclass(frozen=True)
class ClearCommand:
    sink: TerminalSink

    name: str = "clear"
    aliases: tuple[str, ...] = ("cls",)
    description: str = "Clear the terminal screen"

    def execute(self, args: list[str]) -> None:
        self.sink.clear()


@dataclass(frozen=True)
class HelpCommand:
    """Lists every distinct registered command with its aliases."""

    sink: TerminalSink
    registry: CommandRegistry

    name: str = "help"
    aliases: tuple[str, ...] = ()
    description: str = "Show this help message with all available commands"

    def execute(self, args: list[str]) -> None:
        self.sink.write_line("Available commands:")
        for cmd in self.registry.list_commands():
            self.sink.write_line(format_help_line(cmd))


def format_help_line(cmd: Command) -> str:
    """Format ``  <name>[ / <alias> ...] - <description>``."""
    alias_text = ""
    if cmd.aliases:
        alias_text = " / " + " / ".join(cmd.aliases)
    return f"  {cmd.name}{alias_text} - {cmd.description}"


@dataclass(frozen=True)
class EchoCommand:
    sink: TerminalSink

    name: str = "echo"
    aliases: tuple[str, ...] = ()
    description: str = "Echo text back to the terminal"

    def execute(self, args: list[str]) -> None:
        if args:
            self.sink.write_line(" ".join(args))


@dataclass(frozen=True)
class ColorCommand:
    """Changes the terminal color through the injected ColorApplier."""

    sink: TerminalSink
    colors: ColorApplier
    palette: dict[str, str] = field(
        default_factory=lambda: dict(TERMINAL_COLORS)
    )

    name: str = "color"
    aliases: tuple[str, ...] = ()
    description: str = "Change terminal color (green, amber, white, cyan)"

    def execute(self, args: list[str]) -> None:
        names = "|".join(self.palette)
        if not args:
            self.sink.write_line(f"Usage: color <{names}>")
            return

        color = args[0].lower()
        hex_value = self.palette.get(color)
        if hex_value is None:
            self.sink.write_line(f"Unknown color: {args[0]}")
            self.sink.write_line(
                f"Available colors: {', '.join(self.palette)}"
            )
            return

        self.colors.apply_color(hex_value)
        self.sink.write_line(f"Color changed to {color}")


@dataclass
class RpsRecord:
    """Win/loss/tie counters for one rps command instance."""

    wins: int = 0
    losses: int = 0
    ties: int = 0

    @property
    def total(self) -> int:
        return self.wins + self.losses + self.ties

    @property
    def win_rate(self) -> float:
        if self.total == 0:
            return 0.0
        return self.wins / self.total * 100


def score_round(player: str, computer: str) -> str:
    """Return "tie", "win" or "loss" from the player's point of view."""
    if player == computer:
        return "tie"
    if RPS_BEATS[player] == computer:
        return "win"
    return "loss"


@dataclass
class RpsCommand:
    """Rock Paper Scissors with a running record.

    The computer's pick comes from ``chooser`` (``random.choice`` unless
    injected), so rounds are deterministic under test.
    """

    sink: TerminalSink
    chooser: Callable[[Sequence[str]], str] = random.choice
    record: RpsRecord = field(default_factory=RpsRecord)

    name: str = "rps"
    aliases: tuple[str, ...] = ()
    description: str = (
        "Play Rock Paper Scissors (usage: rps rock/paper/scissors, rps stats)"
    )

    def execute(self, args: list[str]) -> None:
        if not args:
            self._show_help()
            return

        if args[0].lower() == "stats":
            self._show_stats()
            return

        self.play(args[0])

    def play(self, player_choice: str) -> str | None:
        """Play one round; returns the outcome or None for a bad choice."""
        choice = RPS_ALIASES.get(player_choice.lower())
        if choice is None:
            self.sink.write_line(
                "Invalid choice! Use: rock, paper, scissors (or r, p, s)"
            )
            return None

        computer = self.chooser(RPS_CHOICES)

        self.sink.write_line(f"You chose: {choice}")
        self.sink.write_line(f"Computer chose: {computer}")
        self.sink.write_line("")

        outcome = score_round(choice, computer)
        if outcome == "tie":
            self.sink.write_line("It's a TIE!")
            self.record.ties += 1
        elif outcome == "win":
            self.sink.write_line("★ YOU WIN! ★")
            self.record.wins += 1
        else:
            self.sink.write_line("You LOSE!")
            self.record.losses += 1

        r = self.record
        self.sink.write_line(f"Record: {r.wins}W - {r.losses}L - {r.ties}T")
        return outcome

    def _show_help(self) -> None:
        for line in (
            "Rock Paper Scissors Game",
            "Usage: rps <choice>",
            "  Choices: rock, paper, scissors (or r, p, s)",
            "  Example: rps rock",
            "",
            "Check your stats with: rps stats",
        ):
            self.sink.write_line(line)

    def _show_stats(self) -> None:
        r = self.record
        self.sink.write_line(rule())
        self.sink.write_line("  ROCK PAPER SCISSORS STATISTICS")
        self.sink.write_line(rule())
        self.sink.write_line(f"  Wins:   {r.wins}")
        self.sink.write_line(f"  Losses: {r.losses}")
        self.sink.write_line(f"  Ties:   {r.ties}")

        if r.total > 0:
            self.sink.write_line(f"  Total:  {r.total} games")
            self.sink.write_line(f"  Win %:  {r.win_rate:.1f}%")
        else:
            self.sink.write_line("  No games played yet!")

        self.sink.write_line(rule())


@dataclass(frozen=True)
class MenuCommand:
    overlays: OverlayHost

    name: str = "menu"
    aliases: tuple[str, ...] = ()
    description: str = "Show interactive menu with arrow key navigation"

    def execute(self, args: list[str]) -> None:
        self.overlays.open_demo_menu()


@dataclass(frozen=True)
class PanelsCommand:
    overlays: OverlayHost

    name: str = "panels"
    aliases: tuple[str, ...] = ()
    description: str = "Show multi-panel UI demo with arrow key navigation"

    def execute(self, args: list[str]) -> None:
        self.overlays.open_panel_demo()


def register_default_commands(
    registry: CommandRegistry,
    sink: TerminalSink,
    colors: ColorApplier,
    overlays: OverlayHost,
    chooser: Callable[[Sequence[str]], str] | None = None,
) -> None:
    """Register the built-in command set."""
    rps = RpsCommand(sink) if chooser is None else RpsCommand(sink, chooser)

    # System commands
    registry.register(ClearCommand(sink))
    registry.register(HelpCommand(sink, registry))
    registry.register(EchoCommand(sink))

    # Game commands
    registry.register(rps)

    # UI commands
    registry.register(ColorCommand(sink, colors))
    registry.register(MenuCommand(overlays))
    registry.register(PanelsCommand(overlays))
