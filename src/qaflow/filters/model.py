# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Descriptors for configured external tools and their invocation contract."""

from __future__ import annotations

import hashlib
import shlex
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Final

from ..core.runtime import CommandExecutor, ExecOutput
from ..errors import FilterExecutionError
from ..paths.matcher import GlobMatcher

CURRENT_DIRECTORY: Final[str] = "."


class Action(str, Enum):
    """Top-level action requested on the command line."""

    TIDY = "tidy"
    LINT = "lint"

    @property
    def gerund(self) -> str:
        """Return the ``-ing`` form used in messages, e.g. ``"linting"``."""

        return "tidying" if self is Action.TIDY else "linting"


class RunMode(str, Enum):
    """How many times a filter is invoked for a resolved path set."""

    ROOT = "root"
    DIRS = "dirs"
    FILES = "files"


class Capability(str, Enum):
    """Which actions a filter participates in."""

    TIDY = "tidy"
    LINT = "lint"
    BOTH = "both"


@dataclass(frozen=True, slots=True)
class LintResult:
    """Outcome of a lint invocation that ran to completion."""

    ok: bool
    stdout: str = ""
    stderr: str = ""


@dataclass(frozen=True, slots=True)
class Filter:
    """A configured external lint/tidy tool.

    Instances are immutable for the lifetime of a run. ``command`` holds the
    executable followed by its fixed arguments; the target path (prefixed by
    ``path_flag`` when set) is appended after the action-specific flags.
    """

    name: str
    command: tuple[str, ...]
    run_mode: RunMode = RunMode.FILES
    capability: Capability = Capability.BOTH
    include_globs: tuple[str, ...] = ()
    exclude_globs: tuple[str, ...] = ()
    ok_exit_codes: frozenset[int] = frozenset({0})
    lint_failure_exit_codes: frozenset[int] = frozenset()
    lint_flags: tuple[str, ...] = ()
    tidy_flags: tuple[str, ...] = ()
    path_flag: str | None = None
    env: Mapping[str, str] = field(default_factory=dict)
    chdir: bool = False
    expect_stderr: bool = False
    _include: GlobMatcher = field(init=False, repr=False, compare=False)
    _exclude: GlobMatcher = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.command:
            raise ValueError(f"filter {self.name!r} requires a command")
        object.__setattr__(self, "_include", GlobMatcher.from_patterns(self.include_globs))
        object.__setattr__(self, "_exclude", GlobMatcher.from_patterns(self.exclude_globs))

    def supports(self, action: Action) -> bool:
        """Return ``True`` when this filter participates in ``action``."""

        match self.capability:
            case Capability.BOTH:
                return True
            case Capability.TIDY:
                return action is Action.TIDY
            case Capability.LINT:
                return action is Action.LINT
        raise ValueError(f"Unsupported capability: {self.capability!r}")

    def matches(self, path: Path) -> bool:
        """Return ``True`` when ``path`` passes this filter's include/exclude globs."""

        return self._include.matches(path) and not self._exclude.matches(path)

    def is_applicable(self, path: Path, sibling_files: Sequence[Path]) -> bool:
        """Return whether an invocation for ``path`` should run at all.

        Args:
            path: Invocation target (file, directory, or ``.``), root-relative.
            sibling_files: Files of the originating group.

        Returns:
            bool: For ``FILES`` the target itself must match; for ``DIRS`` and
            ``ROOT`` at least one of the files must.
        """

        match self.run_mode:
            case RunMode.FILES:
                return self.matches(path)
            case RunMode.DIRS | RunMode.ROOT:
                return any(self.matches(candidate) for candidate in sibling_files)
        raise ValueError(f"Unsupported run mode: {self.run_mode!r}")

    def tidy(
        self,
        path: Path,
        sibling_files: Sequence[Path],
        *,
        executor: CommandExecutor,
        root: Path,
    ) -> bool | None:
        """Run the tidy command for ``path``.

        Args:
            path: Invocation target relative to ``root``.
            sibling_files: Files of the originating group.
            executor: Command executor used to launch the tool.
            root: Absolute project root.

        Returns:
            bool | None: ``None`` when not applicable, ``True`` when any
            affected file changed, ``False`` when all were left untouched.

        Raises:
            FilterExecutionError: If the tool cannot be run, exits with a code
                outside ``ok_exit_codes``, or writes unexpected stderr.
        """

        if not self.supports(Action.TIDY):
            raise FilterExecutionError(f"{self.name} is not a tidy filter")
        if not self.is_applicable(path, sibling_files):
            return None
        affected = self._affected_files(path, sibling_files, root)
        before = _fingerprint(affected)
        command, output = self._run(self.tidy_flags, path, root, executor, accepted=self.ok_exit_codes)
        self._check_stderr(command, output)
        return _fingerprint(affected) != before

    def lint(
        self,
        path: Path,
        sibling_files: Sequence[Path],
        *,
        executor: CommandExecutor,
        root: Path,
    ) -> LintResult | None:
        """Run the lint command for ``path``.

        Args:
            path: Invocation target relative to ``root``.
            sibling_files: Files of the originating group.
            executor: Command executor used to launch the tool.
            root: Absolute project root.

        Returns:
            LintResult | None: ``None`` when not applicable; otherwise whether
            the exit code was in ``ok_exit_codes`` along with the output.

        Raises:
            FilterExecutionError: If the tool cannot be run or exits with a
                code in neither ``ok_exit_codes`` nor ``lint_failure_exit_codes``.
        """

        if not self.supports(Action.LINT):
            raise FilterExecutionError(f"{self.name} is not a lint filter")
        if not self.is_applicable(path, sibling_files):
            return None
        accepted = self.ok_exit_codes | self.lint_failure_exit_codes
        command, output = self._run(self.lint_flags, path, root, executor, accepted=accepted)
        passed = output.exit_code in self.ok_exit_codes
        if passed:
            self._check_stderr(command, output)
        return LintResult(ok=passed, stdout=output.stdout, stderr=output.stderr)

    def command_line(self, flags: Sequence[str], path: Path) -> tuple[list[str], str]:
        """Return the argument list and the working-directory mode for ``path``.

        Args:
            flags: Action-specific flags placed after the base command.
            path: Invocation target relative to the root.

        Returns:
            tuple[list[str], str]: Full command (executable first) and the
            directory, relative to the root, the command runs in.
        """

        target = self._target(path)
        arguments = [*self.command, *flags]
        if self.path_flag:
            arguments.append(self.path_flag)
        arguments.append(target)
        return arguments, self._working_directory(path)

    def _run(
        self,
        flags: Sequence[str],
        path: Path,
        root: Path,
        executor: CommandExecutor,
        *,
        accepted: frozenset[int],
    ) -> tuple[list[str], ExecOutput]:
        command, workdir = self.command_line(flags, path)
        executable, *arguments = command
        output = executor.execute(
            executable,
            arguments,
            env=self.env,
            accepted_exit_codes=accepted,
            cwd=(root / workdir) if workdir != CURRENT_DIRECTORY else root,
        )
        return command, output

    def _target(self, path: Path) -> str:
        if self.run_mode is RunMode.ROOT:
            return CURRENT_DIRECTORY
        if not self.chdir:
            return path.as_posix()
        return path.name if self.run_mode is RunMode.FILES else CURRENT_DIRECTORY

    def _working_directory(self, path: Path) -> str:
        if not self.chdir or self.run_mode is RunMode.ROOT:
            return CURRENT_DIRECTORY
        directory = path.parent if self.run_mode is RunMode.FILES else path
        return directory.as_posix()

    def _affected_files(self, path: Path, sibling_files: Sequence[Path], root: Path) -> list[Path]:
        if self.run_mode is RunMode.FILES:
            return [root / path]
        return [root / candidate for candidate in sibling_files]

    def _check_stderr(self, command: Sequence[str], output: ExecOutput) -> None:
        if self.expect_stderr or not output.stderr.strip():
            return
        raise FilterExecutionError(
            f"Ran `{shlex.join(command)}` and got unexpected stderr:\n{output.stderr.rstrip()}",
        )


def _fingerprint(paths: Sequence[Path]) -> tuple[str | None, ...]:
    """Return a content digest per path; ``None`` for files that are gone."""

    digests: list[str | None] = []
    for path in paths:
        try:
            digests.append(hashlib.sha256(path.read_bytes()).hexdigest())
        except FileNotFoundError:
            digests.append(None)
    return tuple(digests)


__all__ = ["Action", "Capability", "Filter", "LintResult", "RunMode"]
