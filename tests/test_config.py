# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for configuration loading, validation, and root discovery."""

from __future__ import annotations

from pathlib import Path

import pytest

from qaflow.config import CONFIG_FILE_NAME, find_project_root, load_config, load_project
from qaflow.errors import CannotFindRootError, ConfigError
from qaflow.filters import Capability, RunMode

VALID_CONFIG = """
exclude = ["vendor/**", "target"]

[commands.rustfmt]
type = "tidy"
cmd = ["rustfmt", "--edition", "2021"]
include = "*.rs"
ok_exit_codes = 0

[commands.ruff]
type = "both"
cmd = "ruff"
include = ["*.py"]
exclude = "tests/fixtures/**"
run_mode = "dirs"
chdir = true
lint_flags = ["check"]
tidy_flags = ["format"]
env = { RUFF_CACHE_DIR = "/tmp/ruff" }
ok_exit_codes = [0]
lint_failure_exit_codes = [1]
expect_stderr = true
"""


def _write_config(root: Path, content: str) -> Path:
    path = root / CONFIG_FILE_NAME
    path.write_text(content, encoding="utf-8")
    return path


def test_load_config_builds_filters_in_declaration_order(tmp_path: Path) -> None:
    config = load_config(_write_config(tmp_path, VALID_CONFIG))

    assert config.exclude == ("vendor/**", "target")
    rustfmt, ruff = config.filters()
    assert rustfmt.name == "rustfmt"
    assert rustfmt.capability is Capability.TIDY
    assert rustfmt.command == ("rustfmt", "--edition", "2021")
    assert rustfmt.include_globs == ("*.rs",)
    assert rustfmt.ok_exit_codes == frozenset({0})
    assert rustfmt.run_mode is RunMode.FILES
    assert ruff.name == "ruff"
    assert ruff.run_mode is RunMode.DIRS
    assert ruff.chdir
    assert ruff.command == ("ruff",)
    assert ruff.exclude_globs == ("tests/fixtures/**",)
    assert ruff.env == {"RUFF_CACHE_DIR": "/tmp/ruff"}
    assert ruff.lint_failure_exit_codes == frozenset({1})
    assert ruff.expect_stderr


@pytest.mark.parametrize(
    ("body", "fragment"),
    [
        ('type = "lint"\ncmd = "x"\ninclude = "*"\nlint_failure_exit_codes = 1\n', "ok_exit_codes"),
        ('type = "lint"\ncmd = "x"\ninclude = "*"\nok_exit_codes = 0\n', "lint_failure_exit_codes"),
        ('type = "tidy"\ncmd = []\ninclude = "*"\nok_exit_codes = 0\n', "cmd must not be empty"),
        ('type = "tidy"\ncmd = "x"\ninclude = []\nok_exit_codes = 0\n', "include must list"),
        (
            'type = "lint"\ncmd = "x"\ninclude = "*"\nok_exit_codes = [0, 1]\nlint_failure_exit_codes = 1\n',
            "appear in both",
        ),
        ('type = "tidy"\ncmd = "x"\ninclude = "*"\nok_exit_codes = ["zero"]\n', "must contain integers"),
        ('type = "sparkle"\ncmd = "x"\ninclude = "*"\nok_exit_codes = 0\n', "commands.bad.type"),
        ('type = "tidy"\ncmd = "x"\ninclude = "*"\nok_exit_codes = 0\nunknown = 1\n', "unknown"),
    ],
)
def test_invalid_commands_raise_config_error(tmp_path: Path, body: str, fragment: str) -> None:
    path = _write_config(tmp_path, f"[commands.bad]\n{body}")

    with pytest.raises(ConfigError, match="Invalid configuration") as excinfo:
        load_config(path)

    assert fragment in str(excinfo.value)


def test_invalid_toml_raises_config_error(tmp_path: Path) -> None:
    path = _write_config(tmp_path, "[commands\n")

    with pytest.raises(ConfigError, match="not valid TOML"):
        load_config(path)


def test_missing_config_raises_config_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="does not exist"):
        load_config(tmp_path / CONFIG_FILE_NAME)


def test_root_is_cwd_when_it_holds_the_config(tmp_path: Path) -> None:
    (tmp_path / ".git").mkdir()
    nested = tmp_path / "sub"
    nested.mkdir()
    _write_config(nested, VALID_CONFIG)

    assert find_project_root(nested) == nested.resolve()


def test_root_falls_back_to_the_nearest_checkout(tmp_path: Path) -> None:
    (tmp_path / ".hg").mkdir()
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    assert find_project_root(nested) == tmp_path.resolve()


def test_root_search_fails_without_config_or_checkout(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("qaflow.config.loader.VCS_METADATA_DIRS", frozenset({".qaflow-test-vcs"}))

    with pytest.raises(CannotFindRootError, match="Could not find"):
        find_project_root(tmp_path)


def test_load_project_honours_an_explicit_config_path(tmp_path: Path) -> None:
    (tmp_path / ".git").mkdir()
    custom = tmp_path / "ci" / "lint.toml"
    custom.parent.mkdir()
    custom.write_text(VALID_CONFIG, encoding="utf-8")

    loaded = load_project(tmp_path, config_path=Path("ci/lint.toml"))

    assert loaded.root == tmp_path.resolve()
    assert loaded.path == tmp_path / "ci" / "lint.toml"
    assert len(loaded.config.filters()) == 2
