# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Orchestration of filter execution over resolved paths."""

from __future__ import annotations

from .context import RunContext
from .executor import LINT_FAILURE_MESSAGE, FilterRunner
from .invocations import build_invocation_map
from .models import NO_FILES_MESSAGE, ActionError, ErrorKind, Exit, InvocationMap
from .orchestrator import Orchestrator

__all__ = [
    "LINT_FAILURE_MESSAGE",
    "NO_FILES_MESSAGE",
    "ActionError",
    "ErrorKind",
    "Exit",
    "FilterRunner",
    "InvocationMap",
    "Orchestrator",
    "RunContext",
    "build_invocation_map",
]
