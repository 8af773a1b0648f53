# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Reshape resolved path groups into per-filter invocation maps."""

from __future__ import annotations

from collections.abc import Sequence

from ..filters import RunMode
from ..paths import ROOT_DIRECTORY, PathGroup, all_files
from .models import InvocationMap


def build_invocation_map(run_mode: RunMode, groups: Sequence[PathGroup]) -> InvocationMap:
    """Return the invocation targets for ``run_mode`` over ``groups``.

    ``ROOT`` collapses every group into a single ``.`` entry, ``DIRS`` keeps
    one entry per group, and ``FILES`` emits one entry per file whose
    siblings are the full file list of its group. The entries never add or
    drop files; they only reshape the resolved set.

    Args:
        run_mode: Run mode of the filter being scheduled.
        groups: Directory groups produced by path resolution.

    Returns:
        InvocationMap: Ordered mapping of target path to sibling files.
    """

    match run_mode:
        case RunMode.ROOT:
            files = all_files(groups)
            return {ROOT_DIRECTORY: files} if files else {}
        case RunMode.DIRS:
            return {group.directory: group.files for group in groups}
        case RunMode.FILES:
            return {path: group.files for group in groups for path in group.files}
    raise ValueError(f"Unsupported run mode: {run_mode!r}")


__all__ = ["build_invocation_map"]
