# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for path resolution across every selection mode."""

from __future__ import annotations

from pathlib import Path

import pytest
from conftest import GitRunner, write

from qaflow.errors import CannotFindRootError, PathResolutionError, StashPopError
from qaflow.paths import Mode, PathResolver, all_files
from qaflow.vcs import GitAdapter


def _files(resolver: PathResolver, mode: Mode, paths: tuple[Path, ...] = ()) -> list[str]:
    groups = resolver.resolve(mode, paths)
    assert groups is not None
    return [path.as_posix() for path in all_files(groups)]


def _project(root: Path) -> None:
    write(root, "main.py")
    write(root, "src/app.py")
    write(root, "src/util.py")
    write(root, "vendor/lib.py")
    write(root, "build/generated.py")


def test_all_mode_walks_the_tree_without_vcs(tmp_path: Path) -> None:
    _project(tmp_path)
    resolver = PathResolver(tmp_path, GitAdapter(tmp_path), ["vendor/"])

    assert _files(resolver, Mode.ALL) == [
        "main.py",
        "build/generated.py",
        "src/app.py",
        "src/util.py",
    ]


def test_all_mode_honours_gitignore(git_repo: Path) -> None:
    _project(git_repo)
    write(git_repo, ".gitignore", "build/\n*.log\n")
    write(git_repo, "debug.log")
    resolver = PathResolver(git_repo, GitAdapter(git_repo))

    files = _files(resolver, Mode.ALL)

    assert "build/generated.py" not in files
    assert "debug.log" not in files
    assert ".gitignore" in files
    assert "src/app.py" in files
    assert not any(path.startswith(".git/") for path in files)


def test_from_cli_expands_directories_and_files(tmp_path: Path) -> None:
    _project(tmp_path)
    resolver = PathResolver(tmp_path, GitAdapter(tmp_path), ["src/util.py"])

    files = _files(resolver, Mode.FROM_CLI, (tmp_path / "src", Path("main.py")))

    assert files == ["main.py", "src/app.py"]


def test_from_cli_rejects_missing_paths(tmp_path: Path) -> None:
    resolver = PathResolver(tmp_path, GitAdapter(tmp_path))

    with pytest.raises(PathResolutionError, match="does not exist"):
        resolver.resolve(Mode.FROM_CLI, (Path("missing.py"),))


def test_from_cli_rejects_paths_outside_root(tmp_path: Path) -> None:
    root = tmp_path / "project"
    root.mkdir()
    outside = write(tmp_path, "outside.py")
    resolver = PathResolver(root, GitAdapter(root))

    with pytest.raises(PathResolutionError, match="outside the project root"):
        resolver.resolve(Mode.FROM_CLI, (outside,))


def test_empty_selection_resolves_to_none(tmp_path: Path) -> None:
    write(tmp_path, "only.py")
    resolver = PathResolver(tmp_path, GitAdapter(tmp_path), ["*.py"])

    assert resolver.resolve(Mode.ALL) is None


def test_git_modes_require_a_checkout(tmp_path: Path) -> None:
    resolver = PathResolver(tmp_path, GitAdapter(tmp_path))

    with pytest.raises(CannotFindRootError):
        resolver.resolve(Mode.GIT_MODIFIED)


def test_git_modified_includes_untracked_and_skips_deleted(git_repo: Path, git: GitRunner) -> None:
    write(git_repo, "tracked.py")
    write(git_repo, "doomed.py")
    git(git_repo, "add", "tracked.py", "doomed.py")
    git(git_repo, "commit", "--quiet", "-m", "add files")
    write(git_repo, "tracked.py", "changed\n")
    (git_repo / "doomed.py").unlink()
    write(git_repo, "new/untracked.py")
    resolver = PathResolver(git_repo, GitAdapter(git_repo))

    assert _files(resolver, Mode.GIT_MODIFIED) == ["tracked.py", "new/untracked.py"]


def test_git_modified_with_clean_tree_is_none(git_repo: Path) -> None:
    resolver = PathResolver(git_repo, GitAdapter(git_repo))

    assert resolver.resolve(Mode.GIT_MODIFIED) is None


def test_git_staged_only_lists_the_index(git_repo: Path, git: GitRunner) -> None:
    write(git_repo, "staged.py")
    write(git_repo, "unstaged.py")
    git(git_repo, "add", "staged.py")
    resolver = PathResolver(git_repo, GitAdapter(git_repo))

    assert _files(resolver, Mode.GIT_STAGED) == ["staged.py"]


@pytest.mark.parametrize("mode", [Mode.ALL, Mode.GIT_MODIFIED, Mode.GIT_STAGED, Mode.GIT_STAGED_WITH_STASH])
def test_excludes_apply_to_every_non_cli_mode(git_repo: Path, git: GitRunner, mode: Mode) -> None:
    write(git_repo, "keep.py")
    write(git_repo, "generated/skip.py")
    write(git_repo, "nested/generated/deep.py")
    git(git_repo, "add", ".")
    write(git_repo, "README.md", "unstaged edit\n")
    write(git_repo, "generated/untracked.py")
    resolver = PathResolver(git_repo, GitAdapter(git_repo), ["generated/**", "*.log"])

    files = _files(resolver, mode)

    assert "keep.py" in files
    assert "nested/generated/deep.py" in files
    assert not any(path.startswith("generated/") for path in files)
    assert (git_repo / "README.md").read_text(encoding="utf-8") == "unstaged edit\n"


def test_staged_with_stash_restores_unstaged_changes(git_repo: Path, git: GitRunner) -> None:
    write(git_repo, "app.py", "one\n")
    write(git_repo, "notes.txt", "draft\n")
    git(git_repo, "add", "app.py", "notes.txt")
    git(git_repo, "commit", "--quiet", "-m", "app")
    write(git_repo, "app.py", "two\n")
    git(git_repo, "add", "app.py")
    write(git_repo, "notes.txt", "unstaged edit\n")
    resolver = PathResolver(git_repo, GitAdapter(git_repo))

    assert _files(resolver, Mode.GIT_STAGED_WITH_STASH) == ["app.py"]
    assert (git_repo / "notes.txt").read_text(encoding="utf-8") == "unstaged edit\n"
    assert git(git_repo, "show", ":app.py") == "two\n"
    assert git(git_repo, "stash", "list") == ""


def test_staged_with_stash_restores_partially_staged_files(git_repo: Path, git: GitRunner) -> None:
    write(git_repo, "app.py", "one\n")
    git(git_repo, "add", "app.py")
    git(git_repo, "commit", "--quiet", "-m", "app")
    write(git_repo, "app.py", "two\n")
    git(git_repo, "add", "app.py")
    write(git_repo, "app.py", "three\n")
    write(git_repo, "scratch.txt", "untracked\n")
    resolver = PathResolver(git_repo, GitAdapter(git_repo))

    assert _files(resolver, Mode.GIT_STAGED_WITH_STASH) == ["app.py"]
    assert (git_repo / "app.py").read_text(encoding="utf-8") == "three\n"
    assert git(git_repo, "show", ":app.py") == "two\n"
    assert (git_repo / "scratch.txt").read_text(encoding="utf-8") == "untracked\n"
    assert git(git_repo, "stash", "list") == ""


def test_staged_with_stash_never_pops_an_unrelated_stash(git_repo: Path, git: GitRunner) -> None:
    write(git_repo, "README.md", "older work\n")
    git(git_repo, "stash", "push", "--quiet", "--message", "someone else's work")
    resolver = PathResolver(git_repo, GitAdapter(git_repo))

    assert resolver.resolve(Mode.GIT_STAGED_WITH_STASH) is None
    assert "someone else's work" in git(git_repo, "stash", "list")
    assert (git_repo / "README.md").read_text(encoding="utf-8") == "# project\n"


class _FailingPopAdapter(GitAdapter):
    def pop_stash(self) -> None:
        raise StashPopError("conflict while restoring")


def test_staged_with_stash_reports_pop_failures(git_repo: Path, git: GitRunner) -> None:
    write(git_repo, "README.md", "unstaged edit\n")
    resolver = PathResolver(git_repo, _FailingPopAdapter(git_repo))

    with pytest.raises(StashPopError, match="conflict while restoring"):
        resolver.resolve(Mode.GIT_STAGED_WITH_STASH)

    assert "qaflow: unstaged changes" in git(git_repo, "stash", "list")
