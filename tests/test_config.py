from __future__ import annotations

import os
from pathlib import Path

import pytest

from retroterm import config


@pytest.fixture
def tmp_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "home"
    home.mkdir(parents=True, exist_ok=True)
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def data_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    data = tmp_path / "retroterm_data_home"
    monkeypatch.setenv("RETROTERM_DATA_HOME", str(data))
    return data


def test_get_data_root_prefers_retroterm_data_home(data_home: Path) -> None:
    """
    RETROTERM_DATA_HOME wins when present, and is created on demand.
    """
    root = config.get_data_root()
    assert root == data_home
    assert root.is_dir()


def test_get_data_root_defaults_to_local_share(
    tmp_home: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.delenv("RETROTERM_DATA_HOME", raising=False)

    expected = Path(os.path.expanduser("~")) / ".local" / "share"
    assert config.get_data_root() == expected


def test_crash_log_path_is_under_data_root(data_home: Path) -> None:
    root = config.get_data_root()
    assert config.crash_log_path(root) == data_home / "retroterm" / "logs" / "crash.log"
    assert config.logs_dir(root) == data_home / "retroterm" / "logs"


def test_terminal_palette() -> None:
    assert config.TERMINAL_COLORS == {
        "green": "#00FF00",
        "amber": "#FFB000",
        "white": "#FFFFFF",
        "cyan": "#00FFFF",
    }
    assert list(config.TERMINAL_COLORS) == ["green", "amber", "white", "cyan"]
    assert config.DEFAULT_COLOR in config.TERMINAL_COLORS


def test_packaged_system_yaml_loads() -> None:
    cfg = config.load_system_config()

    assert cfg.system["name"] == "RetroTerm"
    assert cfg.get_path("system.prompt") == ">"
    banner = cfg.get_path("system.welcome.banner")
    assert isinstance(banner, list) and banner
    assert cfg.get_path("ui.default_color") in config.TERMINAL_COLORS
    assert isinstance(cfg.get_path("ui.theme.style", {}), dict)


def test_missing_defaults_yaml_raises() -> None:
    with pytest.raises(FileNotFoundError):
        config.load_defaults_yaml("does-not-exist.yaml")


def test_non_mapping_yaml_is_rejected(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "list.yaml").write_text("- a\n- b\n", encoding="utf-8")
    monkeypatch.setattr(config, "_defaults_dir", lambda: tmp_path)

    with pytest.raises(ValueError):
        config.load_defaults_yaml("list.yaml")


def test_yaml_config_get_path() -> None:
    cfg = config.YAMLConfig({"ui": {"theme": {"style": {"output": "bg:#000"}}}, "system": 3})

    assert cfg.get_path("ui.theme.style.output") == "bg:#000"
    assert cfg.get_path("ui.missing", "dflt") == "dflt"
    assert cfg.get_path("ui.theme.style.output.deeper", 1) == 1
    assert cfg.get_path("", "empty") == "empty"
    assert cfg.get("ui")["theme"]
    # non-dict sections degrade to empty mappings
    assert cfg.system == {}
    assert config.YAMLConfig({}).ui == {}
