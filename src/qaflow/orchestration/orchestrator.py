# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Drive one ``tidy`` or ``lint`` action from path resolution to exit status."""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import Executor

from ..core.runtime import CommandExecutor
from ..errors import NoFiltersError
from ..filters import Filter
from ..paths import PathGroup, PathResolver
from ..reporting.report import render_error_report
from .context import RunContext
from .executor import FilterRunner
from .invocations import build_invocation_map
from .models import NO_FILES_MESSAGE, ActionError, Exit


class Orchestrator:
    """Resolve paths once, then run each selected filter in sequence.

    The orchestrator holds no mutable state: everything it needs arrives in
    the :class:`RunContext`, and the worker pool is injected so callers own
    its lifetime.
    """

    def __init__(
        self,
        context: RunContext,
        *,
        resolver: PathResolver,
        command_executor: CommandExecutor,
        pool: Executor,
    ) -> None:
        """Create an orchestrator for ``context``.

        Args:
            context: Immutable inputs for this run.
            resolver: Path resolver bound to the project root.
            command_executor: Service used by filters to launch tools.
            pool: Worker pool shared by every filter in the run.
        """

        self._context = context
        self._resolver = resolver
        self._runner = FilterRunner(
            pool=pool,
            command_executor=command_executor,
            root=context.root,
            logger=context.logger,
            chars=context.chars,
        )

    def run(self) -> Exit:
        """Execute the action and return its exit report.

        Returns:
            Exit: Status ``0`` when every invocation passed or there was
            nothing to do, ``1`` with an error report otherwise.

        Raises:
            NoFiltersError: If no filter participates in the action.
            QaflowError: For environment, configuration, or VCS failures
                raised while resolving paths.
        """

        context = self._context
        filters = context.action_filters()
        if not filters:
            raise NoFiltersError(context.action.gerund)

        context.logger.echo(f"{context.chars.ring} {context.action.gerund.capitalize()} {context.mode.description}")
        context.logger.info(f"Running filters: {', '.join(candidate.name for candidate in filters)}")

        groups = self._resolver.resolve(context.mode, context.explicit_paths)
        if groups is None:
            return Exit(status=0, message=NO_FILES_MESSAGE)

        errors = self.run_filters(filters, groups)
        if not errors:
            return Exit(status=0)
        return Exit(
            status=1,
            error_report=render_error_report(errors, context.action.gerund, chars=context.chars),
        )

    def run_filters(self, filters: Sequence[Filter], groups: Sequence[PathGroup]) -> list[ActionError]:
        """Run ``filters`` one after another over ``groups``.

        Errors from one filter never stop later filters; each filter's batch
        is appended only after all of its invocations have finished.

        Args:
            filters: Filters participating in the action, in order.
            groups: Resolved directory groups.

        Returns:
            list[ActionError]: Every error, filter order first.
        """

        collected: list[ActionError] = []
        for candidate in filters:
            invocations = build_invocation_map(candidate.run_mode, groups)
            self._context.logger.debug(
                f"{candidate.name}: {len(invocations)} invocation(s) in {candidate.run_mode.value} mode"
            )
            collected.extend(self._runner.run(candidate, self._context.action, invocations))
        return collected


__all__ = ["Orchestrator"]
