# RetroTerm — Retro-Styled Terminal Command Widget
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Discrete key events produced by hosts and consumed by the input
controller and overlays.
"""

from __future__ import annotations

from enum import Enum, auto


class Key(Enum):
    ENTER = auto()
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    TAB = auto()
    ESCAPE = auto()
    BACKSPACE = auto()
    HOME = auto()
    END = auto()
    # Any printable key; the character travels alongside the event
    CHAR = auto()
