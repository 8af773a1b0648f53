# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Scoped stashing of unstaged changes around staged-file discovery."""

from __future__ import annotations

from types import TracebackType

from .git import VcsAdapter


class StashGuard:
    """Context manager that stashes unstaged changes and always restores them.

    Entering the guard runs :meth:`VcsAdapter.stash_unstaged`; leaving it pops
    the stash exactly once, on every exit path, when a stash entry was
    actually created. An exception raised inside the block propagates only
    after the pop has completed. A failing pop raises
    :class:`~qaflow.errors.StashPopError`, chained to any in-flight error.
    """

    def __init__(self, vcs: VcsAdapter) -> None:
        self._vcs = vcs
        self._stashed = False

    @property
    def stashed(self) -> bool:
        """Return ``True`` while a stash entry is held by this guard."""

        return self._stashed

    def __enter__(self) -> StashGuard:
        self._stashed = self._vcs.stash_unstaged()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool:
        if self._stashed:
            # Cleared first so a failed pop is never retried.
            self._stashed = False
            self._vcs.pop_stash()
        return False


__all__ = ["StashGuard"]
