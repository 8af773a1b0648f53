# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Enumerate the strategies used to select candidate files."""

from __future__ import annotations

from enum import Enum


class Mode(str, Enum):
    """File-selection strategy chosen once per invocation."""

    FROM_CLI = "from-cli"
    ALL = "all"
    GIT_MODIFIED = "git-modified"
    GIT_STAGED = "git-staged"
    GIT_STAGED_WITH_STASH = "git-staged-with-stash"

    @property
    def description(self) -> str:
        """Return the human-readable description used in console banners."""

        return _DESCRIPTIONS[self]

    @property
    def uses_git(self) -> bool:
        """Return ``True`` when the mode consults the VCS adapter for paths."""

        return self in {Mode.GIT_MODIFIED, Mode.GIT_STAGED, Mode.GIT_STAGED_WITH_STASH}

    def __str__(self) -> str:
        return self.description


_DESCRIPTIONS: dict[Mode, str] = {
    Mode.FROM_CLI: "paths passed on the command line (recursively)",
    Mode.ALL: "all files in the project",
    Mode.GIT_MODIFIED: "modified files according to git",
    Mode.GIT_STAGED: "files staged for a git commit",
    Mode.GIT_STAGED_WITH_STASH: "files staged for a git commit, stashing unstaged content",
}


__all__ = ["Mode"]
