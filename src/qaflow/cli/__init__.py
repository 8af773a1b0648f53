# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command-line interface for qaflow."""

from __future__ import annotations

from .app import app, run_action

__all__ = ["app", "run_action"]
