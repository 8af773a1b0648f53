# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared across the qaflow package."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path


class QaflowError(RuntimeError):
    """Base class for every error raised deliberately by qaflow."""


class ConfigError(QaflowError):
    """Raised when configuration input is invalid."""


class NoFiltersError(ConfigError):
    """Raised when the configuration defines no filters for an action."""

    def __init__(self, action: str) -> None:
        """Initialise the error for the ``action`` lacking filters.

        Args:
            action: Gerund describing the action, e.g. ``"linting"``.
        """

        super().__init__(f"No {action} filters defined in your config")
        self.action = action


class InvalidIntegerArgumentError(ConfigError):
    """Raised when a numeric command-line argument cannot be parsed."""

    def __init__(self, argument: str, value: str) -> None:
        """Initialise the error with the offending argument and value.

        Args:
            argument: Name of the CLI flag, e.g. ``"--jobs"``.
            value: Raw value supplied by the user.
        """

        super().__init__(f'Could not parse {argument} argument, "{value}", as an integer')
        self.argument = argument
        self.value = value


class PathResolutionError(ConfigError):
    """Raised when explicit paths supplied by the user cannot be used."""


class UsageError(ConfigError):
    """Raised when command-line flags are missing or contradictory."""


class CannotFindRootError(QaflowError):
    """Raised when no project or VCS checkout root can be located."""

    def __init__(self, cwd: Path) -> None:
        """Initialise the error with the directory the search started from.

        Args:
            cwd: Directory from which the root search began.
        """

        super().__init__(f"Could not find a VCS checkout root starting from {cwd}")
        self.cwd = cwd


class VcsError(QaflowError):
    """Raised when a version-control command fails."""

    def __init__(self, step: str, detail: str) -> None:
        """Initialise the error with the failing ``step`` and its ``detail``.

        Args:
            step: Short description of the VCS operation that failed.
            detail: Underlying failure message.
        """

        super().__init__(f"Error when {step}: {detail}")
        self.step = step
        self.detail = detail


class StashPopError(VcsError):
    """Raised when restoring stashed changes fails, leaving the tree altered."""

    def __init__(self, detail: str) -> None:
        super().__init__("restoring stashed changes with git stash pop", detail)


class FilterExecutionError(QaflowError):
    """Raised when a filter cannot be executed successfully for one path."""


class CommandExecutionError(FilterExecutionError):
    """Raised by the command executor when a process run is unacceptable."""

    def __init__(self, message: str, *, command: Iterable[str]) -> None:
        super().__init__(message)
        self.command = tuple(command)


class ExecutableNotFoundError(CommandExecutionError):
    """Raised when the executable for a command cannot be launched."""

    def __init__(self, executable: str, reason: str, *, command: Iterable[str]) -> None:
        super().__init__(f"Could not run {executable}: {reason}", command=command)
        self.executable = executable


class UnexpectedExitCodeError(CommandExecutionError):
    """Raised when a command exits with a code outside the accepted set."""

    def __init__(
        self,
        *,
        command: Iterable[str],
        exit_code: int,
        stdout: str,
        stderr: str,
    ) -> None:
        """Initialise the error with the observed process result.

        Args:
            command: Full command line that was executed.
            exit_code: Exit status reported by the process.
            stdout: Captured standard output.
            stderr: Captured standard error.
        """

        command_tuple = tuple(command)
        lines = [f"Got unexpected exit code {exit_code} from `{' '.join(command_tuple)}`"]
        if stdout.strip():
            lines.append(f"Stdout:\n{stdout.rstrip()}")
        if stderr.strip():
            lines.append(f"Stderr:\n{stderr.rstrip()}")
        super().__init__("\n".join(lines), command=command_tuple)
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr


__all__ = [
    "CannotFindRootError",
    "CommandExecutionError",
    "ConfigError",
    "ExecutableNotFoundError",
    "FilterExecutionError",
    "InvalidIntegerArgumentError",
    "NoFiltersError",
    "PathResolutionError",
    "QaflowError",
    "StashPopError",
    "UnexpectedExitCodeError",
    "UsageError",
    "VcsError",
]
