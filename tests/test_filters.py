# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for filter applicability, command lines, and tidy/lint outcomes."""

from __future__ import annotations

from collections.abc import Callable, Collection, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from qaflow.core.runtime import ExecOutput
from qaflow.errors import FilterExecutionError, UnexpectedExitCodeError
from qaflow.filters import Action, Capability, Filter, RunMode


@dataclass
class FakeExecutor:
    """Record invocations and reply with a canned result."""

    exit_code: int = 0
    stdout: str = ""
    stderr: str = ""
    side_effect: Callable[[Path | None], None] | None = None
    calls: list[tuple[list[str], Path | None]] = field(default_factory=list)

    def execute(
        self,
        executable: str,
        arguments: Sequence[str],
        *,
        env: Mapping[str, str] | None = None,
        accepted_exit_codes: Collection[int] = (0,),
        cwd: Path | None = None,
    ) -> ExecOutput:
        command = [executable, *arguments]
        self.calls.append((command, cwd))
        if self.side_effect is not None:
            self.side_effect(cwd)
        if self.exit_code not in accepted_exit_codes:
            raise UnexpectedExitCodeError(
                command=command,
                exit_code=self.exit_code,
                stdout=self.stdout,
                stderr=self.stderr,
            )
        return ExecOutput(exit_code=self.exit_code, stdout=self.stdout, stderr=self.stderr)


def _filter(**overrides: object) -> Filter:
    values: dict[str, object] = {
        "name": "checker",
        "command": ("checker", "--strict"),
        "include_globs": ("*.py",),
        "lint_failure_exit_codes": frozenset({1}),
    }
    values.update(overrides)
    return Filter(**values)  # type: ignore[arg-type]


def test_capability_controls_participation() -> None:
    assert _filter(capability=Capability.TIDY).supports(Action.TIDY)
    assert not _filter(capability=Capability.TIDY).supports(Action.LINT)
    assert _filter(capability=Capability.LINT).supports(Action.LINT)
    assert _filter(capability=Capability.BOTH).supports(Action.TIDY)


def test_files_mode_applicability_uses_the_target() -> None:
    candidate = _filter(exclude_globs=("tests/**",))

    assert candidate.is_applicable(Path("src/a.py"), [Path("src/a.py")])
    assert not candidate.is_applicable(Path("src/a.md"), [Path("src/a.py")])
    assert not candidate.is_applicable(Path("tests/a.py"), [Path("tests/a.py")])


def test_dirs_mode_applicability_uses_the_siblings() -> None:
    candidate = _filter(run_mode=RunMode.DIRS)

    assert candidate.is_applicable(Path("src"), [Path("src/a.md"), Path("src/b.py")])
    assert not candidate.is_applicable(Path("docs"), [Path("docs/index.md")])


@pytest.mark.parametrize(
    ("run_mode", "chdir", "target", "expected_args", "expected_dir"),
    [
        (RunMode.FILES, False, Path("src/a.py"), ["src/a.py"], "."),
        (RunMode.FILES, True, Path("src/a.py"), ["a.py"], "src"),
        (RunMode.DIRS, False, Path("src"), ["src"], "."),
        (RunMode.DIRS, True, Path("src"), ["."], "src"),
        (RunMode.ROOT, False, Path("."), ["."], "."),
        (RunMode.ROOT, True, Path("."), ["."], "."),
    ],
)
def test_command_line_targets(
    run_mode: RunMode,
    chdir: bool,
    target: Path,
    expected_args: list[str],
    expected_dir: str,
) -> None:
    candidate = _filter(run_mode=run_mode, chdir=chdir)

    command, workdir = candidate.command_line(("--check",), target)

    assert command == ["checker", "--strict", "--check", *expected_args]
    assert workdir == expected_dir


def test_command_line_inserts_path_flag() -> None:
    candidate = _filter(path_flag="--file")

    command, _ = candidate.command_line((), Path("a.py"))

    assert command == ["checker", "--strict", "--file", "a.py"]


def test_lint_runs_in_the_file_directory_when_chdir(tmp_path: Path) -> None:
    executor = FakeExecutor()
    candidate = _filter(chdir=True, lint_flags=("--lint",))

    result = candidate.lint(Path("pkg/a.py"), [Path("pkg/a.py")], executor=executor, root=tmp_path)

    assert result is not None and result.ok
    assert executor.calls == [(["checker", "--strict", "--lint", "a.py"], tmp_path / "pkg")]


def test_lint_not_applicable_returns_none(tmp_path: Path) -> None:
    executor = FakeExecutor()

    assert _filter().lint(Path("a.md"), [Path("a.md")], executor=executor, root=tmp_path) is None
    assert executor.calls == []


def test_lint_failure_codes_report_findings(tmp_path: Path) -> None:
    executor = FakeExecutor(exit_code=1, stdout="a.py:1: bad\n", stderr="warning\n")

    result = _filter().lint(Path("a.py"), [Path("a.py")], executor=executor, root=tmp_path)

    assert result is not None
    assert not result.ok
    assert result.stdout == "a.py:1: bad\n"
    assert result.stderr == "warning\n"


def test_lint_unknown_exit_code_is_an_execution_error(tmp_path: Path) -> None:
    executor = FakeExecutor(exit_code=2, stderr="crashed\n")

    with pytest.raises(FilterExecutionError, match="unexpected exit code 2"):
        _filter().lint(Path("a.py"), [Path("a.py")], executor=executor, root=tmp_path)


def test_unexpected_stderr_is_an_execution_error(tmp_path: Path) -> None:
    executor = FakeExecutor(stderr="deprecated option\n")

    with pytest.raises(FilterExecutionError, match="unexpected stderr"):
        _filter().lint(Path("a.py"), [Path("a.py")], executor=executor, root=tmp_path)


def test_expected_stderr_is_tolerated(tmp_path: Path) -> None:
    executor = FakeExecutor(stderr="progress\n")

    result = _filter(expect_stderr=True).lint(Path("a.py"), [Path("a.py")], executor=executor, root=tmp_path)

    assert result is not None and result.ok


def test_tidy_detects_changed_files(tmp_path: Path) -> None:
    target = tmp_path / "a.py"
    target.write_text("x=1\n", encoding="utf-8")
    executor = FakeExecutor(side_effect=lambda _cwd: target.write_text("x = 1\n", encoding="utf-8"))

    changed = _filter().tidy(Path("a.py"), [Path("a.py")], executor=executor, root=tmp_path)

    assert changed is True


def test_tidy_reports_unchanged_files(tmp_path: Path) -> None:
    (tmp_path / "a.py").write_text("x = 1\n", encoding="utf-8")
    executor = FakeExecutor()

    assert _filter().tidy(Path("a.py"), [Path("a.py")], executor=executor, root=tmp_path) is False


def test_tidy_in_dirs_mode_watches_every_sibling(tmp_path: Path) -> None:
    (tmp_path / "pkg").mkdir()
    first = tmp_path / "pkg" / "a.py"
    second = tmp_path / "pkg" / "b.py"
    first.write_text("a\n", encoding="utf-8")
    second.write_text("b\n", encoding="utf-8")
    executor = FakeExecutor(side_effect=lambda _cwd: second.write_text("B\n", encoding="utf-8"))
    candidate = _filter(run_mode=RunMode.DIRS)

    changed = candidate.tidy(Path("pkg"), [Path("pkg/a.py"), Path("pkg/b.py")], executor=executor, root=tmp_path)

    assert changed is True


def test_tidy_rejects_lint_only_filters(tmp_path: Path) -> None:
    candidate = _filter(capability=Capability.LINT)

    with pytest.raises(FilterExecutionError, match="not a tidy filter"):
        candidate.tidy(Path("a.py"), [Path("a.py")], executor=FakeExecutor(), root=tmp_path)


def test_tidy_failure_exit_code_is_an_execution_error(tmp_path: Path) -> None:
    (tmp_path / "a.py").write_text("x\n", encoding="utf-8")
    executor = FakeExecutor(exit_code=1)

    with pytest.raises(FilterExecutionError):
        _filter().tidy(Path("a.py"), [Path("a.py")], executor=executor, root=tmp_path)


def test_filter_requires_a_command() -> None:
    with pytest.raises(ValueError, match="requires a command"):
        _filter(command=())
