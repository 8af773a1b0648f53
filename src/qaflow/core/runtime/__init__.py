# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Process execution services."""

from __future__ import annotations

from .executor import CommandExecutor, ExecOutput, SubprocessExecutor, TraceHook
from .process import CommandOptions, run_command

__all__ = [
    "CommandExecutor",
    "CommandOptions",
    "ExecOutput",
    "SubprocessExecutor",
    "TraceHook",
    "run_command",
]
