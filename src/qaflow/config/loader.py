# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Locate the project root and load ``qaflow.toml``."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..errors import CannotFindRootError, ConfigError
from ..paths.walker import VCS_METADATA_DIRS
from .models import CONFIG_FILE_NAME, ProjectConfig


@dataclass(frozen=True, slots=True)
class LoadedConfig:
    """A validated configuration together with where it came from."""

    path: Path
    root: Path
    config: ProjectConfig


def find_project_root(cwd: Path) -> Path:
    """Return the project root for a run started in ``cwd``.

    The root is ``cwd`` itself when it holds a ``qaflow.toml``; otherwise the
    nearest ancestor (including ``cwd``) containing a VCS metadata directory.

    Args:
        cwd: Directory the command was started from.

    Returns:
        Path: Absolute project root.

    Raises:
        CannotFindRootError: If neither a config file nor a checkout is found.
    """

    start = cwd.resolve()
    if (start / CONFIG_FILE_NAME).is_file():
        return start
    for candidate in (start, *start.parents):
        if any((candidate / name).exists() for name in VCS_METADATA_DIRS):
            return candidate
    raise CannotFindRootError(start)


def load_config(path: Path) -> ProjectConfig:
    """Read and validate the TOML document at ``path``.

    Args:
        path: Location of the configuration file.

    Returns:
        ProjectConfig: Validated configuration.

    Raises:
        ConfigError: If the file is missing, is not valid TOML, or fails validation.
    """

    if not path.is_file():
        raise ConfigError(f"Configuration file {path} does not exist")
    try:
        with path.open("rb") as handle:
            document: Mapping[str, Any] = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Configuration at {path} is not valid TOML: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Could not read configuration at {path}: {exc}") from exc
    try:
        return ProjectConfig.model_validate(document)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration in {path}:\n{_describe(exc)}") from exc


def load_project(cwd: Path, *, config_path: Path | None = None) -> LoadedConfig:
    """Locate the project root from ``cwd`` and load its configuration.

    Args:
        cwd: Directory the command was started from.
        config_path: Explicit configuration file overriding the default
            ``<root>/qaflow.toml``; relative paths are taken from ``cwd``.

    Returns:
        LoadedConfig: Root, configuration path, and validated configuration.
    """

    root = find_project_root(cwd)
    if config_path is None:
        path = root / CONFIG_FILE_NAME
    else:
        path = config_path if config_path.is_absolute() else cwd / config_path
    return LoadedConfig(path=path, root=root, config=load_config(path))


def _describe(error: ValidationError) -> str:
    """Render pydantic validation errors as ``location: message`` lines."""

    lines: list[str] = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ()))
        message = str(item.get("msg", "invalid value"))
        lines.append(f"  {location}: {message}" if location else f"  {message}")
    return "\n".join(lines)


__all__ = ["LoadedConfig", "find_project_root", "load_config", "load_project"]
