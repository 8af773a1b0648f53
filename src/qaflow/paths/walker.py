# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Filesystem traversal honouring exclude globs and VCS ignore rules."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from .matcher import GlobMatcher

VCS_METADATA_DIRS: Final[frozenset[str]] = frozenset({".git", ".hg", ".svn"})


@dataclass(frozen=True, slots=True)
class IgnoreRules:
    """Root-relative paths the VCS reports as ignored.

    Directory entries cover every path beneath them.
    """

    files: frozenset[Path] = field(default_factory=frozenset)
    directories: frozenset[Path] = field(default_factory=frozenset)

    @classmethod
    def from_entries(cls, entries: Iterable[str]) -> IgnoreRules:
        """Build rules from ``git ls-files --directory`` style entries.

        Args:
            entries: Root-relative entries; directories end with ``/``.

        Returns:
            IgnoreRules: Parsed rules.
        """

        files: set[Path] = set()
        directories: set[Path] = set()
        for entry in entries:
            if not entry:
                continue
            if entry.endswith("/"):
                directories.add(Path(entry.rstrip("/")))
            else:
                files.add(Path(entry))
        return cls(files=frozenset(files), directories=frozenset(directories))

    def is_ignored(self, path: Path) -> bool:
        """Return ``True`` when root-relative ``path`` is ignored."""

        if path in self.files or path in self.directories:
            return True
        return any(parent in self.directories for parent in path.parents)


@dataclass(frozen=True, slots=True)
class WalkContext:
    """Parameters required to walk the filesystem hierarchy."""

    root: Path
    excludes: GlobMatcher
    ignore: IgnoreRules


def walk_files(base: Path, context: WalkContext) -> Iterator[Path]:
    """Yield root-relative files beneath ``base`` that survive filtering.

    Args:
        base: Absolute directory inside ``context.root`` to traverse.
        context: Immutable walk context containing exclusion settings.

    Yields:
        Path: Root-relative file paths, in no particular order.
    """

    for dirpath, dirnames, filenames in os.walk(base):
        current = Path(dirpath)
        relative_dir = current.relative_to(context.root)
        dirnames[:] = [
            name for name in dirnames if not _should_skip_directory(relative_dir / name, name, context)
        ]
        for filename in filenames:
            relative = relative_dir / filename
            if context.excludes.matches(relative) or context.ignore.is_ignored(relative):
                continue
            yield relative


def _should_skip_directory(relative: Path, name: str, context: WalkContext) -> bool:
    """Return whether the directory at ``relative`` should not be traversed.

    Args:
        relative: Root-relative directory path.
        name: Directory basename.
        context: Traversal context containing excludes and ignore rules.

    Returns:
        bool: ``True`` if the directory should be pruned.
    """

    if name in VCS_METADATA_DIRS:
        return True
    return context.excludes.matches(relative) or context.ignore.is_ignored(relative)


__all__ = ["VCS_METADATA_DIRS", "IgnoreRules", "WalkContext", "walk_files"]
