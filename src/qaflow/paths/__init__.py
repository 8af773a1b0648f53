# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""File-selection engine for the qaflow package."""

from __future__ import annotations

from .groups import ROOT_DIRECTORY, PathGroup, all_files, group_by_directory
from .matcher import GlobMatcher
from .mode import Mode
from .resolver import PathResolver
from .walker import IgnoreRules, WalkContext, walk_files

__all__ = [
    "ROOT_DIRECTORY",
    "GlobMatcher",
    "IgnoreRules",
    "Mode",
    "PathGroup",
    "PathResolver",
    "WalkContext",
    "all_files",
    "group_by_directory",
    "walk_files",
]
