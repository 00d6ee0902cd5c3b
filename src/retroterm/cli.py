# RetroTerm — Retro-Styled Terminal Command Widget
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
RetroTerm CLI entry point and legacy REPL loop.

Design:
- CLI owns process startup and config loading.
- Kernel is the session engine (config injected).
- UI is the full-screen prompt_toolkit application; RETROTERM_LEGACY_UI=1
  falls back to a line-oriented input()/print() loop.
"""

from __future__ import annotations

import os
from collections.abc import Callable

from . import config
from .kernel import Kernel
from .keys import Key
from .ui import PromptToolkitUI

ANSI_CLEAR = "\033[2J\033[H"

# Words accepted as keys while an overlay is active in the legacy loop
LINE_KEYS: dict[str, Key] = {
    "": Key.ENTER,
    "enter": Key.ENTER,
    "w": Key.UP,
    "k": Key.UP,
    "up": Key.UP,
    "s": Key.DOWN,
    "j": Key.DOWN,
    "down": Key.DOWN,
    "a": Key.LEFT,
    "h": Key.LEFT,
    "left": Key.LEFT,
    "d": Key.RIGHT,
    "l": Key.RIGHT,
    "right": Key.RIGHT,
    "tab": Key.TAB,
    "q": Key.ESCAPE,
    "esc": Key.ESCAPE,
}


class TranscriptPrinter:
    """Prints sink growth since the last flush.

    When the transcript shrank or was rewritten (clear, overlay redraw)
    the screen is cleared and the whole transcript printed again.
    """

    def __init__(self, output_fn: Callable[[str], None]) -> None:
        self.output_fn = output_fn
        self._shown = ""

    def flush(self, text: str) -> None:
        if text == self._shown:
            return

        if text.startswith(self._shown):
            new = text[len(self._shown):]
        else:
            self.output_fn(ANSI_CLEAR)
            new = text

        self._shown = text
        if new:
            # print() supplies the final newline
            self.output_fn(new[:-1] if new.endswith("\n") else new)


def run_repl(
    kernel: Kernel,
    input_fn: Callable[[str], str] = input,
    output_fn: Callable[[str], None] = print,
) -> None:
    """Run the line-oriented RetroTerm loop."""
    printer = TranscriptPrinter(output_fn)
    printer.flush(kernel.sink.text)

    while kernel.running:
        try:
            if kernel.in_overlay:
                word = input_fn("[key]> ").strip().lower()
                key = LINE_KEYS.get(word)
                if key is not None:
                    kernel.handle_key(key)
            else:
                line = input_fn(kernel.prompt() + " ")
                if not (line or "").strip():
                    continue
                kernel.submit(line)

            printer.flush(kernel.sink.text)

        except (KeyboardInterrupt, EOFError):
            output_fn("\nBye!\n")
            break


def main() -> None:
    """Main entry point for RetroTerm."""
    cfg = config.load_system_config()
    kernel = Kernel(config=cfg)
    kernel.start()

    # If user explicitly disables the full-screen UI:
    if os.environ.get("RETROTERM_LEGACY_UI") == "1":
        run_repl(kernel)
        return

    ui = PromptToolkitUI(kernel)
    ui.run()
