# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared Rich consoles for status and log output."""

from __future__ import annotations

import sys
from functools import cache

from rich.console import Console


def detect_tty() -> bool:
    """Return ``True`` when stdout is attached to a terminal."""

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


def get_console(*, color: bool, emoji: bool) -> Console:
    """Return the console for the current stdout and the given preferences.

    Consoles resolve ``sys.stdout`` at print time, so one instance per
    ``(color, emoji, tty)`` combination is reused for the whole process.
    """

    tty = detect_tty()
    return _console(color and tty, emoji, tty)


@cache
def _console(color: bool, emoji: bool, tty: bool) -> Console:
    return Console(
        color_system="auto" if color else None,
        force_terminal=tty,
        no_color=not color,
        emoji=emoji,
        highlight=False,
        soft_wrap=True,
    )


__all__ = ["detect_tty", "get_console"]
