# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Status glyphs used when printing per-path results."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Chars:
    """Set of glyphs prefixed to console status lines."""

    ring: str
    tidied: str
    unchanged: str
    lint_free: str
    lint_dirty: str
    execution_error: str
    bullet: str
    empty: str


FUN_CHARS = Chars(
    ring="💍",
    tidied="💧",
    unchanged="✨",
    lint_free="💯",
    lint_dirty="💩",
    execution_error="💥",
    bullet="▶",
    empty="⚫",
)

BORING_CHARS = Chars(
    ring=":",
    tidied="*",
    unchanged="|",
    lint_free="|",
    lint_dirty="*",
    execution_error="!",
    bullet="*",
    empty="_",
)


def select_chars(*, ascii_only: bool) -> Chars:
    """Return the glyph set matching the ``ascii_only`` preference."""

    return BORING_CHARS if ascii_only else FUN_CHARS


__all__ = ["BORING_CHARS", "FUN_CHARS", "Chars", "select_chars"]
