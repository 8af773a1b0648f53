# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest

GitRunner = Callable[..., str]


def run_git(root: Path, *args: str) -> str:
    """Run ``git`` inside ``root`` and return its stdout."""

    completed = subprocess.run(
        ["git", *args],
        cwd=root,
        check=True,
        capture_output=True,
        text=True,
    )
    return completed.stdout


def write(root: Path, relative: str, content: str = "content\n") -> Path:
    """Create ``relative`` under ``root`` with ``content``."""

    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """Return an initialised git checkout holding one committed file."""

    root = tmp_path / "repo"
    root.mkdir()
    run_git(root, "init", "--quiet")
    run_git(root, "config", "user.email", "qaflow@example.com")
    run_git(root, "config", "user.name", "qaflow")
    run_git(root, "config", "commit.gpgsign", "false")
    write(root, "README.md", "# project\n")
    run_git(root, "add", "README.md")
    run_git(root, "commit", "--quiet", "-m", "initial")
    return root


@pytest.fixture
def git() -> GitRunner:
    """Expose :func:`run_git` to tests."""

    return run_git
