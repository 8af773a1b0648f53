# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Version-control adapters used during path resolution."""

from __future__ import annotations

from .git import GIT_EXECUTABLE, GitAdapter, VcsAdapter
from .stash import StashGuard

__all__ = ["GIT_EXECUTABLE", "GitAdapter", "StashGuard", "VcsAdapter"]
