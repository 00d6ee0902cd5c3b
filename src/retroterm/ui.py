# RetroTerm — Retro-Styled Terminal Command Widget
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

from __future__ import annotations

from typing import TYPE_CHECKING

from prompt_toolkit.application import Application
from prompt_toolkit.buffer import Buffer
from prompt_toolkit.document import Document
from prompt_toolkit.filters import Condition
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import (
    BufferControl,
    ConditionalContainer,
    FormattedTextControl,
    HSplit,
    Layout,
    Window,
)
from prompt_toolkit.styles import DynamicStyle, Style

from .keys import Key

if TYPE_CHECKING:
    from .kernel import Kernel  # pragma: no cover


# ----------------------------
# Config helpers (MUST come from config.py facade via kernel.config.get_path)
# ----------------------------


def _cfg_get_path(kernel: Kernel | None, path: str, default):
    if kernel is None:
        return default
    cfg = getattr(kernel, "config", None)
    if cfg is None or not hasattr(cfg, "get_path"):
        return default
    try:
        return cfg.get_path(path, default)
    except Exception:
        return default


def _cfg_dict(kernel: Kernel | None, path: str, default: dict) -> dict:
    val = _cfg_get_path(kernel, path, default)
    return val if isinstance(val, dict) else default


# ----------------------------
# Theme / Style
# ----------------------------


def _default_style_dict(color: str) -> dict[str, str]:
    # Every accent follows the active terminal color
    return {
        "output": f"bg:#000000 {color}",
        "input": f"bg:#000000 {color}",
        "prompt": f"bg:#000000 {color} bold",
        "separator": f"bg:#000000 {color}",
    }


def _build_style(kernel: Kernel | None, color: str) -> Style:
    base = _default_style_dict(color)
    overrides = _cfg_dict(kernel, "ui.theme.style", {})
    # only keep string->string; the accent color is always appended
    for k, v in list(overrides.items()):
        if isinstance(k, str) and isinstance(v, str):
            base[k] = f"{v} {color}"
    return Style.from_dict(base)


# ----------------------------
# Full-screen terminal UI
# ----------------------------


class PromptToolkitUI:
    """
    Full-screen retro terminal:
      - Read-only transcript mirroring the kernel sink, always scrolled
        to the newest line.
      - A separator and a one-line input (hidden while an overlay owns
        the keyboard).
      - Every key is routed to the kernel's input controller.
      - Ctrl+C / Ctrl+D leave the application.
    """

    def __init__(self, kernel: Kernel | None = None) -> None:
        self.kernel = kernel
        self.app: Application | None = None
        self._color = (
            getattr(kernel, "current_color", "") or "#00FF00"
        )
        self._style = _build_style(kernel, self._color)
        self._output = Buffer(read_only=True)

    # ---------- rendering ----------

    def _input_visible(self) -> bool:
        if self.kernel is None:
            return True
        return bool(self.kernel.controller.input_visible)

    def _input_fragments(self):
        if self.kernel is None:
            return [("class:prompt", "> ")]
        ctl = self.kernel.controller
        before = ctl.text[:ctl.cursor]
        after = ctl.text[ctl.cursor:]
        return [
            ("class:prompt", f"{self.kernel.prompt()} "),
            ("class:input", before),
            ("[SetCursorPosition]", ""),
            ("class:input", after),
        ]

    def refresh(self) -> None:
        """Mirror the sink into the output buffer, cursor at the tail."""
        text = self.kernel.sink.text if self.kernel is not None else ""
        self._output.set_document(
            Document(text, cursor_position=len(text)),
            bypass_readonly=True,
        )
        if self.app is not None:
            self.app.invalidate()

    def apply_color(self, hex_value: str) -> None:
        """Restyle foreground, caret and separator."""
        self._color = hex_value
        self._style = _build_style(self.kernel, hex_value)
        if self.app is not None:
            self.app.invalidate()

    def build_layout(self) -> Layout:
        visible = Condition(self._input_visible)
        output = Window(
            BufferControl(buffer=self._output, focusable=False),
            wrap_lines=True,
            style="class:output",
        )
        separator = ConditionalContainer(
            Window(height=1, char="─", style="class:separator"),
            filter=visible,
        )
        input_line = ConditionalContainer(
            Window(
                FormattedTextControl(
                    self._input_fragments,
                    focusable=True,
                    show_cursor=True,
                ),
                height=1,
                style="class:input",
            ),
            filter=visible,
        )
        return Layout(HSplit([output, separator, input_line]))

    # ---------- keybindings ----------

    def build_key_bindings(self, kernel: Kernel) -> KeyBindings:
        kb = KeyBindings()

        def _route(key: Key, char: str = "") -> None:
            kernel.handle_key(key, char)
            self.refresh()

        @kb.add("c-c")
        @kb.add("c-d")
        def _(event):
            kernel.running = False
            event.app.exit()

        named = {
            "enter": Key.ENTER,
            "up": Key.UP,
            "down": Key.DOWN,
            "left": Key.LEFT,
            "right": Key.RIGHT,
            "tab": Key.TAB,
            "backspace": Key.BACKSPACE,
            "home": Key.HOME,
            "end": Key.END,
        }
        for name, key in named.items():

            @kb.add(name)
            def _(event, key=key):
                _route(key)

        # Escape must not wait for an Alt-sequence
        @kb.add("escape", eager=True)
        def _(event):
            _route(Key.ESCAPE)

        @kb.add("<any>")
        def _(event):
            data = event.data or ""
            if len(data) == 1 and data.isprintable():
                _route(Key.CHAR, data)

        return kb

    # ---------- session ----------

    def _ensure_app(self) -> None:
        if self.app is not None:
            return

        key_bindings = (
            self.build_key_bindings(self.kernel)
            if self.kernel else None
        )
        self.app = Application(
            layout=self.build_layout(),
            key_bindings=key_bindings,
            style=DynamicStyle(lambda: self._style),
            full_screen=True,
        )

    def run(self) -> None:
        """Run the application until Ctrl+C / Ctrl+D."""
        if self.kernel is not None:
            self.kernel.sink.on_change = self.refresh
            self.kernel.color_fn = self.apply_color
        self._ensure_app()
        assert self.app is not None
        self.refresh()
        self.app.run()
