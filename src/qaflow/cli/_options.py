# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Global option handling and file-selection parsing for the CLI."""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from ..core.chars import Chars, select_chars
from ..core.logging import CLILogger, Verbosity
from ..errors import InvalidIntegerArgumentError, UsageError
from ..paths import Mode

JOBS_FLAG = "--jobs"


@dataclass(frozen=True, slots=True)
class GlobalOptions:
    """Options accepted before the ``tidy``/``lint`` subcommand."""

    config: Path | None = None
    jobs: int = 0
    ascii_only: bool = False
    verbosity: Verbosity = Verbosity.NORMAL

    @property
    def workers(self) -> int:
        """Return the worker-pool size, defaulting to the processor count."""

        return self.jobs or os.cpu_count() or 1

    @property
    def chars(self) -> Chars:
        return select_chars(ascii_only=self.ascii_only)

    def build_logger(self) -> CLILogger:
        """Return a logger honouring the verbosity and ASCII preferences."""

        return CLILogger(use_emoji=not self.ascii_only, verbosity=self.verbosity)


def parse_jobs(raw: str | None) -> int:
    """Parse the ``--jobs`` value.

    Args:
        raw: Raw option text, or ``None`` when the flag was omitted.

    Returns:
        int: Requested worker count; ``0`` selects the processor count.

    Raises:
        InvalidIntegerArgumentError: If ``raw`` is not a non-negative integer.
    """

    if raw is None:
        return 0
    try:
        value = int(raw)
    except ValueError as exc:
        raise InvalidIntegerArgumentError(JOBS_FLAG, raw) from exc
    if value < 0:
        raise InvalidIntegerArgumentError(JOBS_FLAG, raw)
    return value


def resolve_verbosity(*, verbose: bool, debug: bool, trace: bool, quiet: bool) -> Verbosity:
    """Collapse the mutually exclusive verbosity flags into one level."""

    if sum((verbose, debug, trace, quiet)) > 1:
        raise UsageError("Only one of --verbose, --debug, --trace, or --quiet may be given")
    if trace:
        return Verbosity.TRACE
    if debug:
        return Verbosity.DEBUG
    if verbose:
        return Verbosity.VERBOSE
    if quiet:
        return Verbosity.QUIET
    return Verbosity.NORMAL


def select_mode(
    *,
    all_files: bool,
    git: bool,
    staged: bool,
    staged_with_stash: bool,
    paths: Sequence[Path],
) -> Mode:
    """Return the :class:`Mode` named by exactly one selection flag.

    Raises:
        UsageError: If no selection or more than one selection was given.
    """

    chosen = [
        mode
        for mode, enabled in (
            (Mode.ALL, all_files),
            (Mode.GIT_MODIFIED, git),
            (Mode.GIT_STAGED, staged),
            (Mode.GIT_STAGED_WITH_STASH, staged_with_stash),
            (Mode.FROM_CLI, bool(paths)),
        )
        if enabled
    ]
    if len(chosen) != 1:
        raise UsageError(
            "You must pass exactly one of --all, --git, --staged, --staged-with-stash, or a list of paths",
        )
    return chosen[0]


def absolute_paths(paths: Sequence[Path], cwd: Path) -> tuple[Path, ...]:
    """Anchor command-line paths to the directory the user ran from."""

    return tuple(path if path.is_absolute() else cwd / path for path in paths)


__all__ = [
    "GlobalOptions",
    "absolute_paths",
    "parse_jobs",
    "resolve_verbosity",
    "select_mode",
]
