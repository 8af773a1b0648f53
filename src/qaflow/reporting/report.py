# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render the consolidated error report and final exit messages."""

from __future__ import annotations

from collections.abc import Sequence
from textwrap import indent
from typing import TYPE_CHECKING

from ..core.chars import FUN_CHARS, Chars
from ..core.logging import CLILogger

if TYPE_CHECKING:
    from ..orchestration.models import ActionError, Exit


def render_error_report(errors: Sequence[ActionError], action_gerund: str, *, chars: Chars = FUN_CHARS) -> str:
    """Return a report enumerating every ``(path, filter, message)`` triple.

    Entries appear in the order given, which the orchestrator keeps stable:
    filter order first, then invocation order within each filter.

    Args:
        errors: Collected per-path errors; must not be empty.
        action_gerund: ``"tidying"`` or ``"linting"``.
        chars: Glyph set providing the bullet character.

    Returns:
        str: Multi-line report text.
    """

    plural = "s" if len(errors) > 1 else ""
    lines = [f"Error{plural} when {action_gerund} files:"]
    for error in errors:
        lines.append(f"  {chars.bullet} {error.path} [{error.filter_name}]")
        lines.append(indent(error.message, "    "))
    return "\n".join(lines)


def emit_exit(result: Exit, logger: CLILogger, *, chars: Chars = FUN_CHARS) -> None:
    """Print the report and message carried by ``result``."""

    if result.error_report:
        logger.fail(result.error_report)
    if result.message:
        logger.echo(f"{chars.empty} {result.message}")


__all__ = ["emit_exit", "render_error_report"]
