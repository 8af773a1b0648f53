# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Console reporting helpers."""

from __future__ import annotations

from .report import emit_exit, render_error_report

__all__ = ["emit_exit", "render_error_report"]
