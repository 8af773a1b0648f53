# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Typer application exposing the ``tidy`` and ``lint`` commands."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Annotated

import typer

from ..config import load_project
from ..core.logging import CLILogger
from ..core.runtime import SubprocessExecutor
from ..errors import QaflowError, StashPopError
from ..filters import Action
from ..orchestration import Exit, Orchestrator, RunContext
from ..paths import Mode, PathResolver
from ..reporting import emit_exit
from ..vcs import GitAdapter
from ._options import GlobalOptions, absolute_paths, parse_jobs, resolve_verbosity, select_mode

FAILURE_PREFIX = "Failed to run qaflow"

app = typer.Typer(
    name="qaflow",
    help="Run configured tidiers and linters over a selected set of files.",
    add_completion=False,
    no_args_is_help=True,
)

AllOption = Annotated[bool, typer.Option("--all", "-a", help="Run against all files in the project.")]
GitOption = Annotated[bool, typer.Option("--git", "-g", help="Run against files modified according to git.")]
StagedOption = Annotated[bool, typer.Option("--staged", "-s", help="Run against files staged for a git commit.")]
StashOption = Annotated[
    bool,
    typer.Option(
        "--staged-with-stash",
        help="Run against staged files after stashing unstaged changes.",
    ),
]
PathsArgument = Annotated[
    list[Path] | None,
    typer.Argument(help="Files or directories to process recursively.", show_default=False),
]


@app.callback()
def main(
    ctx: typer.Context,
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to the configuration file."),
    ] = None,
    jobs: Annotated[
        str | None,
        typer.Option("--jobs", "-j", help="Number of parallel jobs; defaults to the processor count."),
    ] = None,
    ascii_only: Annotated[bool, typer.Option("--ascii", help="Use ASCII glyphs instead of emoji.")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable verbose output.")] = False,
    debug: Annotated[bool, typer.Option("--debug", "-d", help="Print debugging information.")] = False,
    trace: Annotated[bool, typer.Option("--trace", "-t", help="Also trace every command that is executed.")] = False,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Only print failures and errors.")] = False,
) -> None:
    """Collect global options shared by every subcommand."""

    try:
        verbosity = resolve_verbosity(verbose=verbose, debug=debug, trace=trace, quiet=quiet)
        ctx.obj = GlobalOptions(config=config, jobs=parse_jobs(jobs), ascii_only=ascii_only, verbosity=verbosity)
    except QaflowError as exc:
        CLILogger(use_emoji=not ascii_only).fail(f"{FAILURE_PREFIX}: {exc}")
        raise typer.Exit(code=1) from exc


@app.command()
def tidy(
    ctx: typer.Context,
    all_files: AllOption = False,
    git: GitOption = False,
    staged: StagedOption = False,
    staged_with_stash: StashOption = False,
    paths: PathsArgument = None,
) -> None:
    """Tidy the selected files in place."""

    _dispatch(ctx, Action.TIDY, all_files, git, staged, staged_with_stash, paths or [])


@app.command()
def lint(
    ctx: typer.Context,
    all_files: AllOption = False,
    git: GitOption = False,
    staged: StagedOption = False,
    staged_with_stash: StashOption = False,
    paths: PathsArgument = None,
) -> None:
    """Lint the selected files without modifying them."""

    _dispatch(ctx, Action.LINT, all_files, git, staged, staged_with_stash, paths or [])


def _dispatch(
    ctx: typer.Context,
    action: Action,
    all_files: bool,
    git: bool,
    staged: bool,
    staged_with_stash: bool,
    paths: list[Path],
) -> None:
    """Run ``action`` and translate its outcome into a process exit code."""

    options: GlobalOptions = ctx.obj or GlobalOptions()
    logger = options.build_logger()
    try:
        mode = select_mode(
            all_files=all_files,
            git=git,
            staged=staged,
            staged_with_stash=staged_with_stash,
            paths=paths,
        )
        result = run_action(action, mode, paths, options=options, logger=logger)
    except StashPopError as exc:
        logger.fail(f"{FAILURE_PREFIX}: {exc}")
        logger.warn(
            "Your unstaged changes may still be stashed. "
            "Inspect them with `git stash list` and restore them with `git stash pop`.",
        )
        raise typer.Exit(code=1) from exc
    except QaflowError as exc:
        logger.fail(f"{FAILURE_PREFIX}: {exc}")
        raise typer.Exit(code=1) from exc

    emit_exit(result, logger, chars=options.chars)
    raise typer.Exit(code=result.status)


def run_action(
    action: Action,
    mode: Mode,
    paths: list[Path],
    *,
    options: GlobalOptions,
    logger: CLILogger,
    cwd: Path | None = None,
) -> Exit:
    """Load the project configuration and run ``action`` over ``mode``.

    Args:
        action: Action to perform.
        mode: File-selection strategy.
        paths: Explicit paths for :attr:`Mode.FROM_CLI`.
        options: Global CLI options.
        logger: Logger honouring the requested verbosity.
        cwd: Directory the command was started from; the process working
            directory when omitted.

    Returns:
        Exit: Outcome of the run.
    """

    start = cwd or Path.cwd()
    loaded = load_project(start, config_path=options.config)
    logger.debug(f"Loaded configuration from {loaded.path}; project root is {loaded.root}")

    command_executor = SubprocessExecutor(trace=logger.trace if logger.trace_enabled else None)
    context = RunContext(
        action=action,
        mode=mode,
        root=loaded.root,
        filters=loaded.config.filters(),
        exclude_globs=loaded.config.exclude,
        explicit_paths=absolute_paths(paths, start),
        logger=logger,
        chars=options.chars,
    )
    resolver = PathResolver(
        loaded.root,
        GitAdapter(loaded.root, executor=command_executor),
        context.exclude_globs,
        trace=logger.debug,
    )
    with ThreadPoolExecutor(max_workers=options.workers) as pool:
        orchestrator = Orchestrator(context, resolver=resolver, command_executor=command_executor, pool=pool)
        return orchestrator.run()


__all__ = ["app", "main", "run_action"]
