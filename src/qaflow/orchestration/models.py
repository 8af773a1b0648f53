# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Value objects produced while orchestrating an action."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Final

NO_FILES_MESSAGE: Final[str] = "No files found"

InvocationMap = dict[Path, tuple[Path, ...]]
"""Invocation target mapped to the sibling files passed along with it."""


class ErrorKind(str, Enum):
    """Whether a per-path problem was a lint finding or an execution error."""

    FAILED = "failed"
    ERRORED = "errored"


@dataclass(frozen=True, slots=True)
class ActionError:
    """One path/filter failure surfaced while running an action."""

    path: Path
    filter_name: str
    message: str
    kind: ErrorKind = ErrorKind.ERRORED


@dataclass(frozen=True, slots=True)
class Exit:
    """Terminal result of one invocation."""

    status: int
    message: str | None = None
    error_report: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == 0


__all__ = ["NO_FILES_MESSAGE", "ActionError", "ErrorKind", "Exit", "InvocationMap"]
