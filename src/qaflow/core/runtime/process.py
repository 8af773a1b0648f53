# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import os
import shutil

# Bandit: subprocess usage is intentional; we provide a controlled wrapper around
# external tool execution, normalising arguments and disabling ``shell=True``.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from pathlib import Path
from subprocess import CompletedProcess


@dataclass(frozen=True, slots=True)
class CommandOptions:
    """Immutable command execution options."""

    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    capture_output: bool = True
    text: bool = True
    discard_stdin: bool = True

    def with_env(self, extra: Mapping[str, str]) -> CommandOptions:
        """Return options whose environment layers ``extra`` over ``os.environ``.

        Args:
            extra: Variables added to (or overriding) the inherited environment.

        Returns:
            CommandOptions: Updated options; ``self`` when ``extra`` is empty.
        """

        if not extra:
            return self
        merged = dict(os.environ if self.env is None else self.env)
        merged.update({str(key): str(value) for key, value in extra.items()})
        return replace(self, env=merged)


def _normalize_args(args: Sequence[str]) -> list[str]:
    """Normalise the subprocess argument sequence.

    Args:
        args: Raw command arguments supplied by the caller.

    Returns:
        list[str]: Validated argument list suitable for subprocess execution.

    Raises:
        ValueError: If no arguments are provided.
        FileNotFoundError: If the executable cannot be resolved on ``PATH``.
    """

    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        msg = f"Executable '{head}' was not found on PATH"
        raise FileNotFoundError(msg)
    return [resolved, *rest]


def run_command(args: Sequence[str], *, options: CommandOptions | None = None) -> CompletedProcess[str]:
    """Execute ``args`` after normalising the executable path.

    The exit status is never checked here; callers decide which exit codes
    are acceptable. Text output is decoded as UTF-8 with undecodable bytes
    replaced, so a tool emitting another encoding still yields a result.

    Args:
        args: Command and argument sequence to execute.
        options: Options configuring execution semantics.

    Returns:
        CompletedProcess[str]: Subprocess execution metadata.

    Raises:
        FileNotFoundError: If the executable cannot be resolved on ``PATH``.
    """

    normalized = _normalize_args(args)
    resolved_options = options or CommandOptions()
    # Bandit: commands originate from vetted configuration; we pass argument
    # lists directly without shell expansion.
    return subprocess.run(  # nosec B603
        normalized,
        cwd=str(resolved_options.cwd) if resolved_options.cwd is not None else None,
        env=dict(resolved_options.env) if resolved_options.env is not None else None,
        check=False,
        capture_output=resolved_options.capture_output,
        text=resolved_options.text,
        encoding="utf-8" if resolved_options.text else None,
        errors="replace" if resolved_options.text else None,
        stdin=subprocess.DEVNULL if resolved_options.discard_stdin else None,
    )


__all__ = ["CommandOptions", "run_command"]
