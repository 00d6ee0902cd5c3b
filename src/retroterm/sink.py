# RetroTerm — Retro-Styled Terminal Command Widget
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Terminal sink.

The single surface all command output passes through. The transcript is
an append-only character buffer; overlays redraw a region in place by
recording a length (the anchor) and truncating back to it before
writing again.
"""

from __future__ import annotations

from collections.abc import Callable


class BufferSink:
    """In-memory TerminalSink implementation."""

    def __init__(self, on_change: Callable[[], None] | None = None) -> None:
        self._text = ""
        # Hosts hook this to re-render and scroll to the tail
        self.on_change = on_change

    @property
    def text(self) -> str:
        return self._text

    def lines(self) -> list[str]:
        """Return the transcript split into lines (no trailing empty line)."""
        return self._text.splitlines()

    def write_line(self, text: str) -> None:
        self._text += f"{text}\n"
        self._changed()

    def clear(self) -> None:
        self._text = ""
        self._changed()

    def current_length(self) -> int:
        return len(self._text)

    def truncate_to(self, length: int) -> None:
        """Truncate the transcript to ``length`` characters.

        Out-of-range lengths are clamped to ``[0, current_length()]`` so the
        transcript can never grow through a truncate.
        """
        length = max(0, min(int(length), len(self._text)))
        self._text = self._text[:length]
        self._changed()

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()
