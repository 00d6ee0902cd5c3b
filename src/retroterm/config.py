# RetroTerm — Retro-Styled Terminal Command Widget
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Configuration and data root resolution for RetroTerm.

Handles:
- Data root resolution (RETROTERM_DATA_HOME, ~/.local/share)
- Crash log location
- Packaged YAML defaults loading (retroterm/defaults/system.yaml)
- Terminal color palette constants
"""

from __future__ import annotations

import os
from importlib import resources as importlib_resources
from pathlib import Path
from typing import Any

import yaml

# -----------------------
# Color palette
# -----------------------

# Names accepted by the color command, in display order
TERMINAL_COLORS: dict[str, str] = {
    "green": "#00FF00",
    "amber": "#FFB000",
    "white": "#FFFFFF",
    "cyan": "#00FFFF",
}

DEFAULT_COLOR = "green"


# -----------------------
# Config model wrapper
# -----------------------


class YAMLConfig:
    """Simple config wrapper that implements ConfigModel protocol."""

    def __init__(self, config_dict: dict[str, Any]):
        self._config = config_dict

    @property
    def system(self) -> dict[str, Any]:
        sys_cfg = self._config.get("system", {})
        return sys_cfg if isinstance(sys_cfg, dict) else {}

    @property
    def ui(self) -> dict[str, Any]:
        ui_cfg = self._config.get("ui", {})
        return ui_cfg if isinstance(ui_cfg, dict) else {}

    def get(self, key: str, default: Any = None) -> Any:
        return self._config.get(key, default)

    def get_path(self, path: str, default: Any = None) -> Any:
        """
        Nested lookup using dot-separated path.
        Example: get_path("ui.theme.style", {}) -> dict style mapping
        """
        if not path:
            return default

        cur: Any = self._config
        for part in path.split("."):
            if not isinstance(cur, dict):
                return default
            if part not in cur:
                return default
            cur = cur[part]
        return cur


# -----------------------
# Data root + log helpers
# -----------------------


def get_data_root() -> Path:
    """Get the data root directory for RetroTerm.

    Resolution order:
    1. RETROTERM_DATA_HOME environment variable (if set)
    2. ~/.local/share (default)
    """
    data_home = os.getenv("RETROTERM_DATA_HOME")
    if data_home:
        root = Path(data_home)
    else:
        root = Path.home() / ".local" / "share"

    root.mkdir(parents=True, exist_ok=True)
    return root


def logs_dir(data_root: Path) -> Path:
    """<data_root>/retroterm/logs"""
    return data_root / "retroterm" / "logs"


def crash_log_path(data_root: Path) -> Path:
    """<data_root>/retroterm/logs/crash.log"""
    return logs_dir(data_root) / "crash.log"


# -----------------------
# Packaged defaults loading
# -----------------------


def _defaults_dir() -> Path:
    """Return the installed path to the packaged defaults directory."""
    return Path(
        importlib_resources.files("retroterm.defaults")
    )  # type: ignore[arg-type]


def load_defaults_yaml(filename: str) -> dict[str, Any]:
    """
    Load a YAML file from retroterm/defaults/.
    """
    defaults_dir = _defaults_dir()
    path = defaults_dir / filename
    if not path.exists():
        raise FileNotFoundError(
            f"Missing defaults YAML: {filename} "
            f"(looked in {defaults_dir})"
        )

    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(
            f"Defaults YAML {filename} must load to a mapping/dict."
        )
    return data


def load_system_config() -> YAMLConfig:
    """
    Load system.yaml from packaged defaults and return a YAMLConfig wrapper.
    """
    return YAMLConfig(load_defaults_yaml("system.yaml"))
