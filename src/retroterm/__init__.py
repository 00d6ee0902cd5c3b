# RetroTerm — Retro-Styled Terminal Command Widget
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
RetroTerm core package.

A retro-styled terminal widget: a command registry with aliases, an
append-only terminal sink, menu and panel overlays, and an input
controller with history and Tab completion. The core is headless;
``retroterm.ui`` hosts it in a full-screen prompt_toolkit application.
"""
from .kernel import Kernel as Kernel  # noqa: F401 (re-export)

__version__ = "1.0.0"
