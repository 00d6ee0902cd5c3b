# RetroTerm — Retro-Styled Terminal Command Widget
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
RetroTerm kernel.

Session engine wiring the headless core together:
- terminal sink (transcript)
- command registry + built-in commands
- menu / panel overlays
- input controller (key routing, history, autocomplete)

Important boundary:
- Kernel does not load YAML; it consumes the injected ConfigModel.
- Kernel never touches a concrete UI. Hosts observe the sink through
  ``sink.on_change`` and colors through ``color_fn``.
"""

from __future__ import annotations

import traceback
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime

from . import config as cfg_module
from .commands import register_default_commands
from .config import DEFAULT_COLOR, TERMINAL_COLORS
from .controller import HELP_HINT, InputController
from .interfaces import ConfigModel
from .keys import Key
from .overlay import MenuItem, MenuOverlay, PanelOverlay
from .registry import CommandRegistry
from .sink import BufferSink

DEMO_MENU_TITLE = "MAIN MENU"


def write_crash_log(
    error: Exception,
    mode: str = "",
    raw_command: str = "",
    color: str = "",
) -> None:
    """Write an entry to the crash log.

    Logs unhandled exceptions raised while executing a command.
    Only creates the log directory when actually needed.
    Appends to crash.log (never overwrites).
    """
    try:
        data_root = cfg_module.get_data_root()
        crash_log_path = cfg_module.crash_log_path(data_root)

        # Create logs directory only when we need to write
        crash_log_path.parent.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().isoformat()
        lines = [
            f"{timestamp}",
            f"mode={mode}",
        ]

        if raw_command:
            lines.append(f"raw={raw_command}")
        if color:
            lines.append(f"color={color}")

        lines.append(f"error={type(error).__name__}: {error}")
        lines.append("traceback:")
        lines.append(traceback.format_exc())
        lines.append("----")

        with crash_log_path.open("a", encoding="utf-8") as f:
            f.write("\n".join(lines) + "\n")

    except Exception:
        # If we can't write the crash log, fail silently
        # (we're already in an error state)
        pass


@dataclass
class Kernel:
    """RetroTerm session engine."""

    config: ConfigModel
    sink: BufferSink = field(default_factory=BufferSink)

    # rps opponent; random.choice when None
    chooser: Callable[[Sequence[str]], str] | None = None

    registry: CommandRegistry = field(default_factory=CommandRegistry)
    running: bool = False

    # Current foreground/caret/accent color (hex)
    current_color: str = ""

    # ---- Host hooks (wired by UI/CLI) ----
    color_fn: Callable[[str], None] | None = None

    controller: InputController = field(init=False)
    menu: MenuOverlay = field(init=False)
    panels: PanelOverlay = field(init=False)

    def __post_init__(self) -> None:
        if not self.current_color:
            name = str(
                self.config.get_path("ui.default_color", DEFAULT_COLOR)
            ).lower()
            self.current_color = TERMINAL_COLORS.get(
                name, TERMINAL_COLORS[DEFAULT_COLOR]
            )

        self.controller = InputController(
            self.registry, self.sink, error_fn=self._record_crash
        )
        self.menu = MenuOverlay(
            self.sink,
            on_enter=self.controller.suspend,
            on_exit=self.controller.resume,
        )
        self.panels = PanelOverlay(
            self.sink,
            on_enter=self.controller.suspend,
            on_exit=self.controller.resume,
        )
        self.controller.overlays = [self.menu, self.panels]

        register_default_commands(
            self.registry, self.sink, self, self, chooser=self.chooser
        )

    # -----------------------
    # Session
    # -----------------------

    def start(self) -> None:
        """Start a session and write the welcome banner."""
        self.running = True

        sys_cfg = self.config.system or {}
        welcome = sys_cfg.get("welcome") or {}
        if not isinstance(welcome, dict):
            welcome = {}

        banner = welcome.get("banner") or []
        if isinstance(banner, str):
            banner = banner.splitlines()
        for line in banner:
            self.sink.write_line(str(line))

        if banner:
            self.sink.write_line("")
        self.sink.write_line(str(welcome.get("hint") or HELP_HINT))
        self.sink.write_line("")

    def prompt(self) -> str:
        """Return the input prompt (without trailing space)."""
        sys_cfg = self.config.system or {}
        return str(sys_cfg.get("prompt") or ">")

    @property
    def in_overlay(self) -> bool:
        return self.controller.in_overlay

    def handle_key(self, key: Key, char: str = "") -> bool:
        return self.controller.handle_key(key, char)

    def submit(self, line: str) -> None:
        self.controller.submit(line)

    # -----------------------
    # Capabilities handed to commands
    # -----------------------

    def apply_color(self, hex_value: str) -> None:
        self.current_color = hex_value
        if self.color_fn is not None:
            self.color_fn(hex_value)

    def open_demo_menu(self) -> None:
        self.menu.open(DEMO_MENU_TITLE, self.demo_menu_items())

    def open_panel_demo(self) -> None:
        self.panels.open()

    def demo_menu_items(self) -> list[MenuItem]:
        def say(text: str) -> Callable[[], None]:
            return lambda: self.sink.write_line(text)

        def run(line: str) -> Callable[[], None]:
            return lambda: self.registry.dispatch(line)

        return [
            MenuItem(
                "Play Rock Paper Scissors",
                say("Type 'rps rock', 'rps paper', or 'rps scissors' to play!"),
            ),
            MenuItem("View RPS Statistics", run("rps stats")),
            MenuItem("Change Color to Green", run("color green")),
            MenuItem("Change Color to Amber", run("color amber")),
            MenuItem("Change Color to Cyan", run("color cyan")),
            MenuItem("Clear Terminal", self.sink.clear),
            MenuItem("Show Help", run("help")),
            MenuItem("Exit Menu", say("Menu closed")),
        ]

    # -----------------------
    # Crash logging
    # -----------------------

    def _record_crash(self, error: Exception, line: str) -> None:
        mode = "overlay" if self.controller.in_overlay else "normal"
        write_crash_log(
            error, mode=mode, raw_command=line, color=self.current_color
        )
