# tests/test_ui.py
from __future__ import annotations

import importlib
from typing import Any

import pytest

prompt_toolkit = pytest.importorskip("prompt_toolkit")

from retroterm.keys import Key  # noqa: E402


class FakeConfig:
    def __init__(self, ui: dict[str, Any] | None = None):
        self.system = {"prompt": ">", "welcome": {"banner": ["RETRO"]}}
        self.ui = ui or {}

    def get_path(self, path: str, default: Any = None) -> Any:
        node: Any = {"system": self.system, "ui": self.ui}
        for part in path.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node


class FakeEvent:
    def __init__(self, data: str = ""):
        self.data = data
        self.app = FakeApp()


class FakeApp:
    def __init__(self, **kwargs: Any):
        self.kwargs = kwargs
        self.exited = False
        self.invalidated = 0
        self.ran = False

    def exit(self) -> None:
        self.exited = True

    def invalidate(self) -> None:
        self.invalidated += 1

    def run(self) -> None:
        self.ran = True


def make_kernel(ui: dict[str, Any] | None = None):
    from retroterm.kernel import Kernel

    k = Kernel(config=FakeConfig(ui), chooser=lambda choices: "rock")
    k.start()
    return k


def _key_names(binding) -> list[str]:
    names = []
    for key in getattr(binding, "keys", []):
        names.append(getattr(key, "value", key))
    return names


def _handler_for(kb, name: str):
    for b in kb.bindings:
        if name in _key_names(b):
            return b.handler
    raise AssertionError(f"no binding for {name}")


def test_ui_module_exports_prompt_toolkit_ui() -> None:
    ui = importlib.import_module("retroterm.ui")
    assert hasattr(ui, "PromptToolkitUI")


def test_exit_and_escape_bindings_are_registered() -> None:
    ui = importlib.import_module("retroterm.ui")
    k = make_kernel()
    kb = ui.PromptToolkitUI(k).build_key_bindings(k)

    registered = {n for b in kb.bindings for n in _key_names(b)}
    assert "c-c" in registered
    assert "c-d" in registered
    assert "escape" in registered
    assert "<any>" in registered


def test_ctrl_c_stops_kernel_and_exits_app() -> None:
    ui = importlib.import_module("retroterm.ui")
    k = make_kernel()
    kb = ui.PromptToolkitUI(k).build_key_bindings(k)

    event = FakeEvent()
    _handler_for(kb, "c-c")(event)

    assert k.running is False
    assert event.app.exited is True


def test_printable_keys_are_routed_as_chars() -> None:
    ui = importlib.import_module("retroterm.ui")
    k = make_kernel()
    inst = ui.PromptToolkitUI(k)
    kb = inst.build_key_bindings(k)
    any_handler = _handler_for(kb, "<any>")

    for ch in "echo":
        any_handler(FakeEvent(ch))
    # control data is ignored
    any_handler(FakeEvent("\x1b[Z"))

    assert k.controller.text == "echo"
    assert inst._output.text == k.sink.text


def test_escape_closes_menu_through_bindings() -> None:
    ui = importlib.import_module("retroterm.ui")
    k = make_kernel()
    inst = ui.PromptToolkitUI(k)
    kb = inst.build_key_bindings(k)

    k.open_demo_menu()
    assert k.in_overlay is True
    assert inst._input_visible() is False

    _handler_for(kb, "escape")(FakeEvent())

    assert k.in_overlay is False
    assert inst._input_visible() is True


def test_refresh_mirrors_sink_with_cursor_at_end() -> None:
    ui = importlib.import_module("retroterm.ui")
    k = make_kernel()
    inst = ui.PromptToolkitUI(k)

    k.submit("echo hello")
    inst.refresh()

    assert inst._output.text == k.sink.text
    assert inst._output.cursor_position == len(k.sink.text)


def test_input_fragments_place_cursor() -> None:
    ui = importlib.import_module("retroterm.ui")
    k = make_kernel()
    inst = ui.PromptToolkitUI(k)

    k.controller.set_text("help")
    k.handle_key(Key.LEFT)

    frags = inst._input_fragments()
    assert frags[0] == ("class:prompt", "> ")
    assert frags[1] == ("class:input", "hel")
    assert frags[2][0] == "[SetCursorPosition]"
    assert frags[3] == ("class:input", "p")


def test_apply_color_rebuilds_style() -> None:
    ui = importlib.import_module("retroterm.ui")
    k = make_kernel(ui={"theme": {"style": {"output": "bg:#111111"}}})
    inst = ui.PromptToolkitUI(k)

    inst.apply_color("#FFB000")

    rules = dict(inst._style.style_rules)
    assert rules["output"] == "bg:#111111 #FFB000"
    assert rules["prompt"] == "bg:#000000 #FFB000 bold"


def test_run_wires_kernel_hooks(monkeypatch: pytest.MonkeyPatch) -> None:
    ui = importlib.import_module("retroterm.ui")
    monkeypatch.setattr(ui, "Application", FakeApp)

    k = make_kernel()
    inst = ui.PromptToolkitUI(k)
    inst.run()

    assert inst.app.ran is True
    assert inst.app.kwargs["full_screen"] is True
    assert k.sink.on_change == inst.refresh
    assert k.color_fn == inst.apply_color

    k.submit("color amber")
    assert inst._color == "#FFB000"
    assert inst._output.text == k.sink.text
    assert inst.app.invalidated > 0
