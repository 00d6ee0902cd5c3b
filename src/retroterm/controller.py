# RetroTerm — Retro-Styled Terminal Command Widget
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Input controller.

Routes discrete key events either to the active overlay (menu or panel
demo) or to normal line editing with command history and Tab
autocompletion. Completed lines are echoed and dispatched through the
command registry.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Protocol

from .interfaces import TerminalSink
from .keys import Key
from .registry import CommandRegistry
from .utils import split_command_line

HELP_HINT = "Type 'help' for available commands."


class Overlay(Protocol):
    active: bool

    def handle_key(self, key: Key) -> bool:
        ...


@dataclass
class History:
    """Submitted command lines plus a recall cursor.

    ``cursor == len(entries)`` is the fresh-line position.
    """

    entries: list[str] = field(default_factory=list)
    cursor: int = 0

    def append(self, line: str) -> None:
        self.entries.append(line)
        self.cursor = len(self.entries)

    def older(self) -> str | None:
        """Step back one entry; None when already at the oldest."""
        if self.entries and self.cursor > 0:
            self.cursor -= 1
            return self.entries[self.cursor]
        return None

    def newer(self) -> str | None:
        """Step forward one entry.

        Returns "" when stepping past the newest entry onto the fresh
        line, and None when already there.
        """
        last = len(self.entries) - 1
        if self.cursor < last:
            self.cursor += 1
            return self.entries[self.cursor]
        if self.cursor == last:
            self.cursor = len(self.entries)
            return ""
        return None


@dataclass
class Autocomplete:
    """Tab completion cycle over command names and aliases."""

    prefix: str = ""
    matches: list[str] = field(default_factory=list)
    index: int = -1

    def reset(self) -> None:
        self.prefix = ""
        self.matches = []
        self.index = -1

    def _current(self) -> str | None:
        if 0 <= self.index < len(self.matches):
            return self.matches[self.index]
        return None

    def next(self, text: str, candidates: Iterable[str]) -> str | None:
        """Return the next completion for ``text``.

        The match list is rebuilt when nothing is cached or when ``text``
        is neither the cached prefix nor the match inserted last.
        """
        if not self.matches or (
            text != self.prefix and text != self._current()
        ):
            self._build(text, candidates)

        if not self.matches:
            return None

        self.index = (self.index + 1) % len(self.matches)
        return self.matches[self.index]

    def _build(self, text: str, candidates: Iterable[str]) -> None:
        self.prefix = text
        self.index = -1
        needle = text.strip().lower()
        if not needle:
            self.matches = sorted(candidates)
        else:
            self.matches = sorted(
                c for c in candidates if c.lower().startswith(needle)
            )


class InputController:
    """Keyboard state machine for the terminal.

    Two mutually exclusive modes: overlay mode (an overlay is active and
    receives every key) and normal mode (line editing, history, Tab).
    """

    def __init__(
        self,
        registry: CommandRegistry,
        sink: TerminalSink,
        overlays: Sequence[Overlay] = (),
        error_fn: Callable[[Exception, str], None] | None = None,
    ) -> None:
        self.registry = registry
        self.sink = sink
        self.overlays: list[Overlay] = list(overlays)
        # Called with (exception, raw line) when a command blows up
        self.error_fn = error_fn

        self.text = ""
        self.cursor = 0
        self.editing_enabled = True
        self.input_visible = True

        self.history = History()
        self.autocomplete = Autocomplete()

    # -----------------------
    # Mode helpers
    # -----------------------

    @property
    def active_overlay(self) -> Overlay | None:
        for overlay in self.overlays:
            if overlay.active:
                return overlay
        return None

    @property
    def in_overlay(self) -> bool:
        return self.active_overlay is not None

    def suspend(self) -> None:
        """Disable line editing and hide the input line (overlay opened)."""
        self.editing_enabled = False
        self.input_visible = False
        self.set_text("")

    def resume(self) -> None:
        """Re-enable line editing and show the input line (overlay closed)."""
        self.editing_enabled = True
        self.input_visible = True
        self.set_text("")

    def set_text(self, text: str) -> None:
        self.text = text
        self.cursor = len(text)

    # -----------------------
    # Key routing
    # -----------------------

    def handle_key(self, key: Key, char: str = "") -> bool:
        """Process one key event. Returns True if the event was consumed."""
        overlay = self.active_overlay
        if overlay is not None:
            try:
                return overlay.handle_key(key)
            except Exception as e:
                # menu actions run inside the overlay key handler
                self._report_error(e, f"<{key.name.lower()}>")
                return True

        if not self.editing_enabled:
            return False

        if key is not Key.TAB:
            self.autocomplete.reset()

        if key is Key.ENTER:
            self._submit_current()
            return True

        if key is Key.UP:
            recalled = self.history.older()
            if recalled is not None:
                self.set_text(recalled)
            return True

        if key is Key.DOWN:
            recalled = self.history.newer()
            if recalled is not None:
                self.set_text(recalled)
            return True

        if key is Key.TAB:
            match = self.autocomplete.next(self.text, self.registry.names())
            if match is not None:
                self.set_text(match)
            return True

        return self._edit(key, char)

    def submit(self, line: str) -> None:
        """Type ``line`` into the input and press Enter."""
        self.autocomplete.reset()
        self.set_text(line)
        self.handle_key(Key.ENTER)

    def _edit(self, key: Key, char: str) -> bool:
        if key is Key.CHAR:
            if not char:
                return False
            self.text = self.text[:self.cursor] + char + self.text[self.cursor:]
            self.cursor += len(char)
            return True

        if key is Key.BACKSPACE:
            if self.cursor > 0:
                self.text = (
                    self.text[:self.cursor - 1] + self.text[self.cursor:]
                )
                self.cursor -= 1
            return True

        if key is Key.LEFT:
            self.cursor = max(0, self.cursor - 1)
            return True

        if key is Key.RIGHT:
            self.cursor = min(len(self.text), self.cursor + 1)
            return True

        if key is Key.HOME:
            self.cursor = 0
            return True

        if key is Key.END:
            self.cursor = len(self.text)
            return True

        return False

    # -----------------------
    # Execution
    # -----------------------

    def _submit_current(self) -> None:
        line = self.text.strip()
        if not line:
            return

        self.sink.write_line(f"> {line}")
        self.history.append(line)
        self._execute(line)
        self.sink.write_line("")
        self.set_text("")

    def _execute(self, line: str) -> None:
        try:
            handled = self.registry.dispatch(line)
        except Exception as e:
            self._report_error(e, line)
            return

        if not handled:
            first = split_command_line(line)[0]
            self.sink.write_line(f"Unknown command: {first}")
            self.sink.write_line(HELP_HINT)

    def _report_error(self, error: Exception, raw: str) -> None:
        if self.error_fn is not None:
            self.error_fn(error, raw)
        self.sink.write_line(
            f"[ERROR] Unhandled exception: {type(error).__name__}: {error}"
        )
