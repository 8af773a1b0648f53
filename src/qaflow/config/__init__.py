# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration loading and validation."""

from __future__ import annotations

from .loader import LoadedConfig, find_project_root, load_config, load_project
from .models import CONFIG_FILE_NAME, CommandConfig, ProjectConfig

__all__ = [
    "CONFIG_FILE_NAME",
    "CommandConfig",
    "LoadedConfig",
    "ProjectConfig",
    "find_project_root",
    "load_config",
    "load_project",
]
