# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Execution service used by filters and the VCS adapter to run commands."""

from __future__ import annotations

import shlex
from collections.abc import Callable, Collection, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from ...errors import ExecutableNotFoundError, UnexpectedExitCodeError
from .process import CommandOptions, run_command

TraceHook = Callable[[str], None]


@dataclass(frozen=True, slots=True)
class ExecOutput:
    """Captured result of a completed process."""

    exit_code: int
    stdout: str
    stderr: str


@runtime_checkable
class CommandExecutor(Protocol):
    """Protocol describing the "exec and capture" primitive."""

    def execute(
        self,
        executable: str,
        arguments: Sequence[str],
        *,
        env: Mapping[str, str] | None = None,
        accepted_exit_codes: Collection[int] = (0,),
        cwd: Path | None = None,
    ) -> ExecOutput:
        """Run ``executable`` with ``arguments`` and capture its output.

        Args:
            executable: Program to launch.
            arguments: Arguments passed after the executable.
            env: Extra environment variables layered over the current environment.
            accepted_exit_codes: Exit codes that count as a completed run.
            cwd: Working directory for the process.

        Returns:
            ExecOutput: Exit code and captured output streams.

        Raises:
            ExecutableNotFoundError: If the executable cannot be launched.
            UnexpectedExitCodeError: If the exit code is not accepted.
        """

        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class SubprocessExecutor:
    """Default :class:`CommandExecutor` backed by :func:`run_command`."""

    trace: TraceHook | None = None

    def execute(
        self,
        executable: str,
        arguments: Sequence[str],
        *,
        env: Mapping[str, str] | None = None,
        accepted_exit_codes: Collection[int] = (0,),
        cwd: Path | None = None,
    ) -> ExecOutput:
        """Run ``executable`` and enforce ``accepted_exit_codes``.

        Args:
            executable: Program to launch.
            arguments: Arguments passed after the executable.
            env: Extra environment variables layered over the current environment.
            accepted_exit_codes: Exit codes that count as a completed run.
            cwd: Working directory for the process.

        Returns:
            ExecOutput: Exit code and captured output streams.

        Raises:
            ExecutableNotFoundError: If the executable cannot be launched.
            UnexpectedExitCodeError: If the exit code is not accepted.
        """

        command = [executable, *arguments]
        if self.trace is not None:
            location = f" in {cwd}" if cwd is not None else ""
            self.trace(f"Running `{shlex.join(command)}`{location}")
        options = CommandOptions(cwd=cwd).with_env(env or {})
        try:
            completed = run_command(command, options=options)
        except (FileNotFoundError, PermissionError) as exc:
            raise ExecutableNotFoundError(executable, str(exc), command=command) from exc
        output = ExecOutput(
            exit_code=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
        if output.exit_code not in accepted_exit_codes:
            raise UnexpectedExitCodeError(
                command=command,
                exit_code=output.exit_code,
                stdout=output.stdout,
                stderr=output.stderr,
            )
        return output


__all__ = ["CommandExecutor", "ExecOutput", "SubprocessExecutor", "TraceHook"]
