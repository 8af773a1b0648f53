# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Compute the working set of files for a :class:`Mode`."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from pathlib import Path

from ..errors import CannotFindRootError, PathResolutionError
from ..vcs import StashGuard, VcsAdapter
from .groups import PathGroup, group_by_directory
from .matcher import GlobMatcher
from .mode import Mode
from .walker import IgnoreRules, WalkContext, walk_files

TraceHook = Callable[[str], None]


class PathResolver:
    """Resolve candidate files for a project root into directory groups."""

    def __init__(
        self,
        root: Path,
        vcs: VcsAdapter,
        exclude_globs: Sequence[str] = (),
        *,
        trace: TraceHook | None = None,
    ) -> None:
        """Create a resolver for ``root``.

        Args:
            root: Absolute project root; all results are relative to it.
            vcs: Adapter used by the git-based modes and for ignore rules.
            exclude_globs: Project-wide exclude globs applied in every mode.
            trace: Optional callback receiving debug messages.
        """

        self._root = root.resolve()
        self._vcs = vcs
        self._excludes = GlobMatcher.from_patterns(exclude_globs)
        self._trace = trace

    def resolve(self, mode: Mode, explicit_paths: Sequence[Path] = ()) -> tuple[PathGroup, ...] | None:
        """Return directory-grouped candidate files for ``mode``.

        Args:
            mode: Selection strategy to apply.
            explicit_paths: Paths given on the command line; used by
                :attr:`Mode.FROM_CLI` only. Relative entries are taken
                relative to the project root.

        Returns:
            tuple[PathGroup, ...] | None: Groups ordered by directory, or
            ``None`` when no candidate files exist.

        Raises:
            CannotFindRootError: If a git mode is requested outside a checkout.
            PathResolutionError: If an explicit path is missing or outside the root.
            VcsError: If a git command fails.
            StashPopError: If stashed changes cannot be restored.
        """

        files = self._files_for(mode, explicit_paths)
        groups = group_by_directory(path for path in files if not self._excludes.matches(path))
        self._debug(f"Resolved {sum(len(group) for group in groups)} file(s) for {mode.description}")
        return groups or None

    def _files_for(self, mode: Mode, explicit_paths: Sequence[Path]) -> Iterable[Path]:
        """Return unfiltered root-relative candidates for ``mode``."""

        if mode.uses_git:
            self._require_checkout()
        match mode:
            case Mode.FROM_CLI:
                return self._from_cli(explicit_paths)
            case Mode.ALL:
                return self._walk(self._root)
            case Mode.GIT_MODIFIED:
                return self._existing(self._vcs.modified_files())
            case Mode.GIT_STAGED:
                return self._existing(self._vcs.staged_files())
            case Mode.GIT_STAGED_WITH_STASH:
                with StashGuard(self._vcs) as guard:
                    self._debug(f"Stashed unstaged changes: {guard.stashed}")
                    staged = self._existing(self._vcs.staged_files())
                return staged
        raise ValueError(f"Unsupported mode: {mode!r}")

    def _from_cli(self, explicit_paths: Sequence[Path]) -> list[Path]:
        """Expand explicit files and directories into root-relative files."""

        collected: list[Path] = []
        for entry in explicit_paths:
            candidate = entry if entry.is_absolute() else self._root / entry
            if not candidate.exists():
                raise PathResolutionError(f"Path {entry} does not exist")
            resolved = candidate.resolve()
            if not resolved.is_relative_to(self._root):
                raise PathResolutionError(f"Path {entry} is outside the project root {self._root}")
            if resolved.is_dir():
                collected.extend(self._walk(resolved))
            else:
                collected.append(resolved.relative_to(self._root))
        return collected

    def _walk(self, base: Path) -> list[Path]:
        """Walk ``base`` applying excludes and VCS ignore rules."""

        context = WalkContext(root=self._root, excludes=self._excludes, ignore=self._ignore_rules())
        return list(walk_files(base, context))

    def _ignore_rules(self) -> IgnoreRules:
        """Return git ignore rules, or empty rules outside a checkout."""

        if self._vcs.checkout_root() is None:
            return IgnoreRules()
        return IgnoreRules.from_entries(self._vcs.ignored_paths())

    def _existing(self, paths: Iterable[Path]) -> list[Path]:
        """Drop paths reported by the VCS that are not files on disk."""

        return [path for path in paths if (self._root / path).is_file()]

    def _require_checkout(self) -> None:
        """Ensure the project root lies inside a VCS checkout."""

        if self._vcs.checkout_root() is None:
            raise CannotFindRootError(self._root)

    def _debug(self, message: str) -> None:
        if self._trace is not None:
            self._trace(message)


__all__ = ["PathResolver"]
