# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Git-backed implementation of the VCS adapter."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Final, Protocol, runtime_checkable

from ..core.runtime import CommandExecutor, ExecOutput, SubprocessExecutor
from ..errors import CommandExecutionError, StashPopError, VcsError

GIT_EXECUTABLE: Final[str] = "git"
STASH_MESSAGE: Final[str] = "qaflow: unstaged changes"
_DIFF_FILTER: Final[str] = "--diff-filter=ACMRT"
_NOT_A_REPOSITORY_EXIT: Final[int] = 128
_NOTHING_TO_STASH: Final[str] = "No local changes to save"
# Stash output is parsed, so it must not be translated.
_UNTRANSLATED_ENV: Final[dict[str, str]] = {"LC_ALL": "C"}


@runtime_checkable
class VcsAdapter(Protocol):
    """Operations the path resolver needs from version control."""

    def checkout_root(self) -> Path | None:
        """Return the checkout root containing the project, or ``None``."""

        raise NotImplementedError

    def modified_files(self) -> list[Path]:
        """Return root-relative files modified relative to ``HEAD``."""

        raise NotImplementedError

    def staged_files(self) -> list[Path]:
        """Return root-relative files staged for commit."""

        raise NotImplementedError

    def stash_unstaged(self) -> bool:
        """Stash unstaged changes keeping the index; return ``True`` if a stash was created."""

        raise NotImplementedError

    def pop_stash(self) -> None:
        """Restore the most recently created stash."""

        raise NotImplementedError

    def ignored_paths(self) -> list[str]:
        """Return root-relative ignored entries, directories suffixed with ``/``."""

        raise NotImplementedError


class GitAdapter:
    """Run git commands inside the project root through a :class:`CommandExecutor`."""

    def __init__(self, root: Path, *, executor: CommandExecutor | None = None) -> None:
        """Create an adapter bound to ``root``.

        Args:
            root: Project root; every command runs with this working directory.
            executor: Command executor; a :class:`SubprocessExecutor` when omitted.
        """

        self._root = root
        self._executor = executor or SubprocessExecutor()

    def checkout_root(self) -> Path | None:
        """Return the top-level directory of the enclosing git checkout.

        Returns:
            Path | None: Checkout root, or ``None`` when ``root`` is not inside
            a git checkout or git is unavailable.
        """

        try:
            output = self._executor.execute(
                GIT_EXECUTABLE,
                ["rev-parse", "--show-toplevel"],
                accepted_exit_codes=(0, _NOT_A_REPOSITORY_EXIT),
                cwd=self._root,
            )
        except CommandExecutionError:
            return None
        if output.exit_code != 0:
            return None
        top = output.stdout.strip()
        return Path(top) if top else None

    def modified_files(self) -> list[Path]:
        """Return tracked changes against ``HEAD`` plus untracked, non-ignored files.

        Returns:
            list[Path]: Root-relative paths restricted to the project root.
        """

        step = "getting modified files from git"
        changed = self._paths(step, ["diff", "--name-only", "-z", "--relative", _DIFF_FILTER, "HEAD", "--"])
        untracked = self._paths(step, ["ls-files", "-z", "--others", "--exclude-standard"])
        return sorted({*changed, *untracked}, key=Path.as_posix)

    def staged_files(self) -> list[Path]:
        """Return files in the staged diff against ``HEAD``.

        Returns:
            list[Path]: Root-relative paths restricted to the project root.
        """

        return self._paths(
            "getting staged files from git",
            ["diff", "--cached", "--name-only", "-z", "--relative", _DIFF_FILTER, "HEAD", "--"],
        )

    def stash_unstaged(self) -> bool:
        """Stash unstaged changes while leaving the index untouched.

        ``git stash push`` is the only command run; whether it created an
        entry is read from its output, so an older entry is never counted.

        Returns:
            bool: ``True`` when a new stash entry was created; ``False`` when
            git had nothing to stash.
        """

        output = self._run(
            "stashing unstaged changes with git stash",
            ["stash", "push", "--keep-index", "--message", STASH_MESSAGE],
            env=_UNTRANSLATED_ENV,
        )
        return _NOTHING_TO_STASH not in f"{output.stdout}\n{output.stderr}"

    def pop_stash(self) -> None:
        """Restore the stash created by :meth:`stash_unstaged` exactly.

        After ``stash push --keep-index`` the working tree equals the index,
        so the tree is reset to ``HEAD`` and the stash is reapplied with
        ``--index``. This restores both the staged and the unstaged content
        of a file changed in both, which a plain three-way ``pop`` would
        turn into conflict markers. Untracked files are never touched.

        Raises:
            StashPopError: If the reset or ``git stash pop --index`` fails.
        """

        for arguments in (["reset", "--hard", "--quiet"], ["stash", "pop", "--index", "--quiet"]):
            try:
                self._executor.execute(GIT_EXECUTABLE, arguments, cwd=self._root)
            except CommandExecutionError as exc:
                raise StashPopError(str(exc)) from exc

    def ignored_paths(self) -> list[str]:
        """Return ignored entries as reported by ``git ls-files --ignored``."""

        output = self._run(
            "listing files ignored by git",
            ["ls-files", "-z", "--others", "--ignored", "--exclude-standard", "--directory"],
        )
        return [entry for entry in output.stdout.split("\0") if entry]

    def _paths(self, step: str, arguments: Sequence[str]) -> list[Path]:
        """Run ``arguments`` and parse NUL-separated path output."""

        output = self._run(step, arguments)
        return [Path(entry) for entry in output.stdout.split("\0") if entry]

    def _run(
        self,
        step: str,
        arguments: Sequence[str],
        *,
        env: Mapping[str, str] | None = None,
    ) -> ExecOutput:
        """Execute a git command, wrapping failures in :class:`VcsError`.

        Args:
            step: Description of the operation for error messages.
            arguments: Arguments passed to ``git``.
            env: Extra environment variables for the command.

        Returns:
            ExecOutput: Captured process output.

        Raises:
            VcsError: If git cannot be launched or exits unexpectedly.
        """

        try:
            return self._executor.execute(
                GIT_EXECUTABLE,
                list(arguments),
                env=env,
                cwd=self._root,
            )
        except CommandExecutionError as exc:
            raise VcsError(step, str(exc)) from exc


__all__ = ["GIT_EXECUTABLE", "GitAdapter", "VcsAdapter"]
