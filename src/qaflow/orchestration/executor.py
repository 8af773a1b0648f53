# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Execute one filter's invocation map concurrently on a worker pool."""

from __future__ import annotations

from concurrent.futures import Executor, Future, as_completed
from dataclasses import dataclass
from pathlib import Path

from ..core.chars import FUN_CHARS, Chars
from ..core.logging import CLILogger
from ..core.runtime import CommandExecutor
from ..errors import FilterExecutionError
from ..filters import Action, Filter
from .models import ActionError, ErrorKind, InvocationMap

LINT_FAILURE_MESSAGE = "linting failed"


@dataclass(frozen=True, slots=True)
class FilterRunner:
    """Run filter invocations on a shared pool and collect their errors.

    Workers never touch shared state: each invocation returns at most one
    :class:`ActionError`, and the calling thread merges the results once all
    futures for the filter have completed.
    """

    pool: Executor
    command_executor: CommandExecutor
    root: Path
    logger: CLILogger
    chars: Chars = FUN_CHARS

    def run(self, candidate: Filter, action: Action, invocations: InvocationMap) -> list[ActionError]:
        """Run ``candidate`` for every entry of ``invocations``.

        Args:
            candidate: Filter to execute.
            action: Action being performed.
            invocations: Targets and their sibling files.

        Returns:
            list[ActionError]: Errors in invocation-map order; empty when every
            entry passed or was not applicable.
        """

        entries = list(invocations.items())
        future_map: dict[Future[ActionError | None], int] = {
            self.pool.submit(self.invoke, candidate, action, target, siblings): order
            for order, (target, siblings) in enumerate(entries)
        }
        results: dict[int, ActionError] = {}
        for future in as_completed(future_map):
            order = future_map[future]
            try:
                error = future.result()
            except Exception as exc:  # one invocation never aborts its siblings
                error = self._execution_error(candidate, entries[order][0], exc)
            if error is not None:
                results[order] = error
        return [results[order] for order in sorted(results)]

    def invoke(
        self,
        candidate: Filter,
        action: Action,
        target: Path,
        siblings: tuple[Path, ...],
    ) -> ActionError | None:
        """Run a single invocation, converting per-path failures to errors."""

        match action:
            case Action.TIDY:
                return self._tidy(candidate, target, siblings)
            case Action.LINT:
                return self._lint(candidate, target, siblings)
        raise ValueError(f"Unsupported action: {action!r}")

    def _tidy(self, candidate: Filter, target: Path, siblings: tuple[Path, ...]) -> ActionError | None:
        try:
            changed = candidate.tidy(target, siblings, executor=self.command_executor, root=self.root)
        except (FilterExecutionError, OSError) as exc:
            return self._execution_error(candidate, target, exc)
        if changed is None:
            return None
        if changed:
            self.logger.status(f"{self.chars.tidied} Tidied by {candidate.name}:    {target}")
        else:
            self.logger.status(f"{self.chars.unchanged} Unchanged by {candidate.name}: {target}")
        return None

    def _lint(self, candidate: Filter, target: Path, siblings: tuple[Path, ...]) -> ActionError | None:
        try:
            result = candidate.lint(target, siblings, executor=self.command_executor, root=self.root)
        except (FilterExecutionError, OSError) as exc:
            return self._execution_error(candidate, target, exc)
        if result is None:
            return None
        if result.ok:
            self.logger.status(f"{self.chars.lint_free} Passed {candidate.name}: {target}")
            return None
        self.logger.problem(f"{self.chars.lint_dirty} Failed {candidate.name}: {target}")
        for stream in (result.stdout, result.stderr):
            if stream.strip():
                self.logger.raw(stream.rstrip())
        return ActionError(
            path=target,
            filter_name=candidate.name,
            message=LINT_FAILURE_MESSAGE,
            kind=ErrorKind.FAILED,
        )

    def _execution_error(self, candidate: Filter, target: Path, exc: Exception) -> ActionError:
        self.logger.problem(f"{self.chars.execution_error} error {candidate.name}: {target}")
        message = str(exc) or type(exc).__name__
        return ActionError(path=target, filter_name=candidate.name, message=message, kind=ErrorKind.ERRORED)


__all__ = ["LINT_FAILURE_MESSAGE", "FilterRunner"]
