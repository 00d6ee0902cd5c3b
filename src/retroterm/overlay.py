# RetroTerm — Retro-Styled Terminal Command Widget
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Menu and panel overlays.

An overlay is a temporary interaction mode layered on top of the
terminal sink. Rendering is immediate-mode: on open the overlay records
the sink length (the anchor); every redraw truncates back to the anchor
and writes the whole region again.

Overlays receive navigation keys from the input controller while
active. ``on_enter`` / ``on_exit`` hooks let the controller suspend and
resume line editing.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from .interfaces import TerminalSink
from .keys import Key
from .utils import box_title

MENU_HINT = "Use ↑↓ arrows to navigate, Enter to select, Esc to exit"
PANEL_HINT = "Use ← → arrows to switch panels | ESC to exit"

SELECTED_PREFIX = "► "
UNSELECTED_PREFIX = "  "


@dataclass
class MenuItem:
    label: str
    action: Callable[[], None] | None = None


class _Overlay:
    """Shared open/exit plumbing for overlays."""

    def __init__(
        self,
        sink: TerminalSink,
        on_enter: Callable[[], None] | None = None,
        on_exit: Callable[[], None] | None = None,
    ) -> None:
        self.sink = sink
        self.on_enter = on_enter
        self.on_exit = on_exit
        self.active = False
        self.content_anchor = 0

    def _activate(self) -> None:
        self.sink.clear()
        self.active = True
        if self.on_enter is not None:
            self.on_enter()

    def _deactivate(self) -> None:
        self.active = False
        if self.on_exit is not None:
            self.on_exit()


# ----------------------------
# Menu
# ----------------------------


class MenuOverlay(_Overlay):
    """Selectable list rendered into the sink.

    States: inactive (Normal) and active (MenuActive).
    """

    def __init__(
        self,
        sink: TerminalSink,
        on_enter: Callable[[], None] | None = None,
        on_exit: Callable[[], None] | None = None,
    ) -> None:
        super().__init__(sink, on_enter, on_exit)
        self.items: list[MenuItem] = []
        self.selected_index = 0

    def open(self, title: str, items: Sequence[MenuItem]) -> None:
        """Clear the sink, write the boxed title and render the items."""
        if not items:
            raise ValueError("A menu needs at least one item")

        self._activate()
        self.items = list(items)
        self.selected_index = 0

        for line in box_title(title):
            self.sink.write_line(line)
        self.sink.write_line("")

        self.content_anchor = self.sink.current_length()
        self.render()

    def render(self) -> None:
        self.sink.truncate_to(self.content_anchor)
        for i, item in enumerate(self.items):
            prefix = (
                SELECTED_PREFIX if i == self.selected_index
                else UNSELECTED_PREFIX
            )
            self.sink.write_line(f"{prefix}{item.label}")
        self.sink.write_line("")
        self.sink.write_line(MENU_HINT)

    def move_up(self) -> None:
        if self.selected_index > 0:
            self.selected_index -= 1
            self.render()

    def move_down(self) -> None:
        if self.selected_index < len(self.items) - 1:
            self.selected_index += 1
            self.render()

    def select(self) -> None:
        """Exit the menu and run the selected item's action."""
        item = self.items[self.selected_index]
        self.close()
        self.sink.write_line(f"> Selected: {item.label}")
        self.sink.write_line("")
        if item.action is not None:
            item.action()
        self.sink.write_line("")

    def close(self) -> None:
        """Leave menu mode without output."""
        self.items = []
        self.selected_index = 0
        self._deactivate()

    def handle_key(self, key: Key) -> bool:
        """Route a key while active. Every key is consumed."""
        if not self.active:
            return False

        if key is Key.UP:
            self.move_up()
        elif key is Key.DOWN:
            self.move_down()
        elif key is Key.ENTER:
            self.select()
        elif key is Key.ESCAPE:
            self.close()
        return True


# ----------------------------
# Panels
# ----------------------------


@dataclass
class Panel:
    title: str
    content: list[str] = field(default_factory=list)
    row: int = 0
    col: int = 0
    width: int = 20
    height: int = 3
    is_active: bool = False


SINGLE_BORDER = {
    "h": "─", "v": "│", "tl": "┌", "tr": "┐", "bl": "└", "br": "┘",
}
DOUBLE_BORDER = {
    "h": "═", "v": "║", "tl": "╔", "tr": "╗", "bl": "╚", "br": "╝",
}


def default_panels() -> list[Panel]:
    """The preset layout shown by the panels demo."""
    return [
        Panel(
            title="System Status",
            content=[
                "CPU: 45%  Memory: 2.3GB  Disk: 128GB Free",
                "Network: Connected  Uptime: 5d 12h 34m",
                "Status: All systems operational",
            ],
            row=0, col=0, width=60, height=5,
            is_active=True,
        ),
        Panel(
            title="Navigation",
            content=[
                "► Dashboard",
                "  Inventory",
                "  Statistics",
                "  Settings",
                "  Help",
                "",
                "Use arrows to",
                "navigate panels",
            ],
            row=6, col=0, width=20, height=12,
        ),
        Panel(
            title="Main Content - Dashboard",
            content=[
                "Welcome to the Multi-Panel Demo!",
                "",
                "This demonstrates a complex UI built",
                "with ASCII art that can be navigated",
                "using arrow keys.",
                "",
                "Features:",
                "• Multiple independent panels",
                "• Arrow key navigation between panels",
                "• Active panel highlighting",
                "• Responsive ASCII borders",
                "• Organized content display",
            ],
            row=6, col=22, width=38, height=12,
        ),
        Panel(
            title="Activity Log",
            content=[
                "[10:45:23] System initialized",
                "[10:45:24] Panels loaded successfully",
                "[10:45:25] Ready for input",
                "[10:45:26] Use arrows to switch panels",
                "[10:45:27] Press ESC to exit demo",
            ],
            row=19, col=0, width=60, height=8,
        ),
    ]


Grid = dict[tuple[int, int], str]


class PanelLayout:
    """Ordered panels with exactly one active panel.

    Panels are drawn in list order onto one sparse grid; where two panels
    cover the same cell the later panel wins.
    """

    def __init__(self, panels: Sequence[Panel] | None = None) -> None:
        self.panels: list[Panel] = (
            list(panels) if panels is not None else default_panels()
        )
        if not self.panels:
            raise ValueError("A panel layout needs at least one panel")

        self.active_index = 0
        for i, panel in enumerate(self.panels):
            if panel.is_active:
                self.active_index = i
                break
        for i, panel in enumerate(self.panels):
            panel.is_active = i == self.active_index

    @property
    def active_panel(self) -> Panel:
        return self.panels[self.active_index]

    def move_next(self) -> None:
        self._activate((self.active_index + 1) % len(self.panels))

    def move_previous(self) -> None:
        self._activate((self.active_index - 1) % len(self.panels))

    def _activate(self, index: int) -> None:
        self.panels[self.active_index].is_active = False
        self.active_index = index
        self.panels[self.active_index].is_active = True

    def render(self) -> str:
        """Render every panel into one text block followed by the hint."""
        grid: Grid = {}
        for panel in self.panels:
            render_panel(panel, grid)

        max_row = max((r for r, _ in grid), default=-1)
        max_col = max((c for _, c in grid), default=-1)

        lines = [
            "".join(grid.get((row, col), " ") for col in range(max_col + 1))
            for row in range(max_row + 1)
        ]
        lines.append("")
        lines.append(PANEL_HINT)
        return "\n".join(lines) + "\n"


def render_panel(panel: Panel, grid: Grid) -> None:
    """Draw one panel's border, title and content into ``grid``."""
    b = DOUBLE_BORDER if panel.is_active else SINGLE_BORDER
    top = panel.row
    bottom = panel.row + panel.height - 1
    left = panel.col
    right = panel.col + panel.width - 1

    # Top border
    grid[(top, left)] = b["tl"]
    for c in range(left + 1, right):
        grid[(top, c)] = b["h"]
    grid[(top, right)] = b["tr"]

    # Title, centered and kept inside the corners
    title = f"►{panel.title}◄" if panel.is_active else f" {panel.title} "
    start = max(1, (panel.width - len(title)) // 2)
    for i, ch in enumerate(title):
        if start + i >= panel.width - 1:
            break
        grid[(top, left + start + i)] = ch

    # Side borders + content
    inner = panel.width - 2
    for r in range(1, panel.height - 1):
        grid[(top + r, left)] = b["v"]
        if r - 1 < len(panel.content):
            for i, ch in enumerate(panel.content[r - 1][:inner]):
                grid[(top + r, left + 1 + i)] = ch
        grid[(top + r, right)] = b["v"]

    # Bottom border
    grid[(bottom, left)] = b["bl"]
    for c in range(left + 1, right):
        grid[(bottom, c)] = b["h"]
    grid[(bottom, right)] = b["br"]


class PanelOverlay(_Overlay):
    """Full-transcript multi-panel demo with panel cycling."""

    def __init__(
        self,
        sink: TerminalSink,
        on_enter: Callable[[], None] | None = None,
        on_exit: Callable[[], None] | None = None,
        layout_factory: Callable[[], PanelLayout] = PanelLayout,
    ) -> None:
        super().__init__(sink, on_enter, on_exit)
        self.layout_factory = layout_factory
        self.layout: PanelLayout | None = None

    def open(self) -> None:
        self._activate()
        self.layout = self.layout_factory()
        self.content_anchor = self.sink.current_length()
        self.render()

    def render(self) -> None:
        if self.layout is None:
            return
        self.sink.truncate_to(self.content_anchor)
        for line in self.layout.render().splitlines():
            self.sink.write_line(line)

    def close(self) -> None:
        self.layout = None
        self._deactivate()

    def handle_key(self, key: Key) -> bool:
        """Route a key while active. Every key is consumed."""
        if not self.active or self.layout is None:
            return False

        if key in (Key.LEFT, Key.UP):
            self.layout.move_previous()
            self.render()
        elif key in (Key.RIGHT, Key.DOWN, Key.TAB):
            self.layout.move_next()
            self.render()
        elif key is Key.ESCAPE:
            self.close()
        return True
