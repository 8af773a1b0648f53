# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Immutable per-invocation inputs consumed by the orchestrator."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ..core.chars import FUN_CHARS, Chars
from ..core.logging import CLILogger
from ..filters import Action, Filter
from ..paths import Mode


@dataclass(frozen=True, slots=True)
class RunContext:
    """Everything one ``tidy`` or ``lint`` run needs, fixed at construction.

    Attributes:
        action: Requested action.
        mode: File-selection strategy.
        root: Absolute project root.
        filters: Every configured filter, in configuration order.
        exclude_globs: Project-wide exclude globs.
        explicit_paths: Paths for :attr:`Mode.FROM_CLI`, relative to ``root``
            or absolute.
        logger: Console logger honouring verbosity settings.
        chars: Glyph set used for status lines.
    """

    action: Action
    mode: Mode
    root: Path
    filters: tuple[Filter, ...]
    exclude_globs: tuple[str, ...] = ()
    explicit_paths: tuple[Path, ...] = ()
    logger: CLILogger = field(default_factory=CLILogger)
    chars: Chars = FUN_CHARS

    def action_filters(self) -> tuple[Filter, ...]:
        """Return the filters participating in :attr:`action`, in order."""

        return tuple(candidate for candidate in self.filters if candidate.supports(self.action))


__all__ = ["RunContext"]
