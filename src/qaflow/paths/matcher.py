# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Gitignore-style glob matching for include and exclude lists."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path, PurePath
from typing import Final

_DOUBLE_STAR_DIR: Final[str] = "**/"
_ANY_PREFIX: Final[str] = "(?:.*/)?"
_ANY_SUFFIX: Final[str] = "(?:/.*)?"


def _translate(pattern: str) -> str:
    """Translate a single glob ``pattern`` into a regular expression body.

    ``**/`` spans zero or more directories, ``**`` spans anything, ``*`` and
    ``?`` never cross a ``/``. Patterns without a slash match a path
    component at any depth; patterns with one are anchored at the root. A
    match on a directory also covers everything beneath it.

    Args:
        pattern: Glob pattern written relative to the project root.

    Returns:
        str: Regular expression source matching root-relative POSIX paths.
    """

    stripped = pattern.strip()
    anchored = "/" in stripped.rstrip("/")
    stripped = stripped.strip("/")
    parts: list[str] = []
    index = 0
    while index < len(stripped):
        if stripped.startswith(_DOUBLE_STAR_DIR, index):
            parts.append(_ANY_PREFIX)
            index += len(_DOUBLE_STAR_DIR)
            continue
        char = stripped[index]
        if stripped.startswith("**", index):
            parts.append(".*")
            index += 2
            continue
        if char == "*":
            parts.append("[^/]*")
        elif char == "?":
            parts.append("[^/]")
        elif char == "[":
            closing = stripped.find("]", index + 1)
            if closing == -1:
                parts.append(re.escape(char))
            else:
                body = stripped[index + 1 : closing].replace("\\", "\\\\")
                if body.startswith("!"):
                    body = "^" + body[1:]
                parts.append(f"[{body}]")
                index = closing
        else:
            parts.append(re.escape(char))
        index += 1
    body = "".join(parts)
    prefix = "" if anchored else _ANY_PREFIX
    return f"{prefix}{body}{_ANY_SUFFIX}"


@dataclass(frozen=True, slots=True)
class GlobMatcher:
    """Compiled set of glob patterns evaluated against root-relative paths."""

    patterns: tuple[str, ...]
    _regex: re.Pattern[str] | None = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        cleaned = [pattern for pattern in self.patterns if pattern.strip()]
        regex = re.compile("|".join(f"(?:{_translate(pattern)})" for pattern in cleaned)) if cleaned else None
        object.__setattr__(self, "_regex", regex)

    @classmethod
    def from_patterns(cls, patterns: Iterable[str]) -> GlobMatcher:
        """Build a matcher from any iterable of glob strings."""

        return cls(tuple(patterns))

    def matches(self, path: PurePath | str) -> bool:
        """Return ``True`` when ``path`` matches any configured pattern.

        Args:
            path: Root-relative path to test.

        Returns:
            bool: ``True`` on a match; always ``False`` for an empty matcher.
        """

        if self._regex is None:
            return False
        candidate = path.as_posix() if isinstance(path, PurePath) else Path(path).as_posix()
        if candidate.startswith("./"):
            candidate = candidate[2:]
        return self._regex.fullmatch(candidate) is not None


__all__ = ["GlobMatcher"]
