# RetroTerm — Retro-Styled Terminal Command Widget
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Utility functions for RetroTerm.
"""

BOX_WIDTH = 58


def split_command_line(line: str) -> list[str]:
    """Split a command line on whitespace, discarding empty tokens.

    No quoting rules apply: ``echo "a  b"`` yields ``['echo', '"a', 'b"']``.

    Args:
        line: Raw input line (may be empty or all whitespace)

    Returns:
        List of tokens, possibly empty
    """
    return (line or "").split()


def box_title(title: str, width: int = BOX_WIDTH) -> list[str]:
    """Build the double-line boxed header used by overlays.

    Args:
        title: Text shown between the rules
        width: Number of horizontal rule characters

    Returns:
        Three lines: top rule, indented title, bottom rule
    """
    return [
        f"╔{'═' * width}╗",
        f"  {title}",
        f"╚{'═' * width}╝",
    ]


def rule(width: int = 35) -> str:
    """Return a double-line horizontal rule."""
    return "═" * width
