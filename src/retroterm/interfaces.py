# RetroTerm — Retro-Styled Terminal Command Widget
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Protocol definitions for dependency injection.

These interfaces keep commands, overlays and the input controller
independent of any concrete UI: a command only sees the narrow
capability it needs (a sink to write to, a color to apply, an
overlay to open).
"""

from __future__ import annotations

from typing import Any, Protocol


class TerminalSink(Protocol):
    """Protocol for the append-only terminal transcript."""

    def write_line(self, text: str) -> None:
        """Append a line of text followed by a newline."""
        ...

    def clear(self) -> None:
        """Remove everything from the transcript."""
        ...

    def current_length(self) -> int:
        """Return the number of characters currently in the transcript."""
        ...

    def truncate_to(self, length: int) -> None:
        """Drop everything after a previously recorded length."""
        ...


class Command(Protocol):
    """Protocol for a dispatchable terminal command."""

    @property
    def name(self) -> str:
        """Primary command name (matched case-insensitively)."""
        ...

    @property
    def aliases(self) -> tuple[str, ...]:
        """Alternative names, e.g. ("cls",) for clear."""
        ...

    @property
    def description(self) -> str:
        """One-line description shown by help."""
        ...

    def execute(self, args: list[str]) -> None:
        """Run the command with its arguments (command name excluded)."""
        ...


class ColorApplier(Protocol):
    """Protocol for the host surface color capability."""

    def apply_color(self, hex_value: str) -> None:
        """Apply a foreground/caret/accent color such as "#00FF00"."""
        ...


class OverlayHost(Protocol):
    """Protocol for opening the interactive overlays."""

    def open_demo_menu(self) -> None:
        """Show the demo menu overlay."""
        ...

    def open_panel_demo(self) -> None:
        """Show the multi-panel layout overlay."""
        ...


class ConfigModel(Protocol):
    """Protocol for configuration access."""

    @property
    def system(self) -> dict[str, Any]:
        """System configuration (name, welcome, prompt)."""
        ...

    @property
    def ui(self) -> dict[str, Any]:
        """UI configuration (default color, theme)."""
        ...

    def get_path(self, path: str, default: Any = None) -> Any:
        """Nested lookup using a dot-separated path."""
        ...
