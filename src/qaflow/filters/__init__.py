# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Filter descriptors wrapping configured external tools."""

from __future__ import annotations

from .model import Action, Capability, Filter, LintResult, RunMode

__all__ = ["Action", "Capability", "Filter", "LintResult", "RunMode"]
