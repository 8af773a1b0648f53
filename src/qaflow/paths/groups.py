# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Directory-grouped path collections produced by path resolution."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Final

ROOT_DIRECTORY: Final[Path] = Path(".")


@dataclass(frozen=True, slots=True)
class PathGroup:
    """A directory together with the candidate files it contains.

    Both ``directory`` and ``files`` are relative to the project root. Files
    are unique and sorted; instances are never mutated after creation.
    """

    directory: Path
    files: tuple[Path, ...]

    def __len__(self) -> int:
        return len(self.files)


def group_by_directory(files: Iterable[Path]) -> tuple[PathGroup, ...]:
    """Partition root-relative ``files`` by their immediate parent directory.

    Args:
        files: Root-relative file paths; duplicates are collapsed.

    Returns:
        tuple[PathGroup, ...]: One group per directory, ordered by directory
        and with lexically sorted files. Empty when ``files`` is empty.
    """

    buckets: dict[Path, set[Path]] = {}
    for path in files:
        buckets.setdefault(path.parent, set()).add(path)
    return tuple(
        PathGroup(directory=directory, files=tuple(sorted(buckets[directory], key=_sort_key)))
        for directory in sorted(buckets, key=_sort_key)
    )


def all_files(groups: Iterable[PathGroup]) -> tuple[Path, ...]:
    """Return every file across ``groups`` in group order."""

    return tuple(path for group in groups for path in group.files)


def _sort_key(path: Path) -> str:
    """Return a platform-neutral lexical sort key for ``path``."""

    return path.as_posix()


__all__ = ["ROOT_DIRECTORY", "PathGroup", "all_files", "group_by_directory"]
