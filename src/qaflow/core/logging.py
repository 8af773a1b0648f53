# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing logging helpers with optional colour and emoji support."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from rich.text import Text

from .console import detect_tty, get_console


class Verbosity(IntEnum):
    """Ordered console verbosity levels selected on the command line."""

    QUIET = 0
    NORMAL = 1
    VERBOSE = 2
    DEBUG = 3
    TRACE = 4


def emoji(symbol: str, enable: bool) -> str:
    """Select an emoji symbol based on the caller's preference.

    Args:
        symbol: Emoji text to include in the output.
        enable: Flag indicating whether emoji output is desired.

    Returns:
        str: Emoji symbol when enabled, otherwise an empty string.
    """

    return symbol if enable else ""


def _print_line(
    msg: str,
    *,
    style: str | None,
    use_emoji: bool,
    use_color: bool | None = None,
) -> None:
    """Render ``msg`` to the console using shared styling helpers.

    Args:
        msg: Message text to print to the console.
        style: Rich style name to apply when colour output is active.
        use_emoji: Flag indicating whether emoji output is desired.
        use_color: Optional explicit colour flag overriding TTY detection.
    """

    color_enabled = detect_tty() if use_color is None else use_color
    console = get_console(color=color_enabled, emoji=use_emoji)
    text = Text(msg)
    if style and color_enabled:
        text.stylize(style)
    console.print(text)


def info(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit an informational message."""

    prefix = emoji("ℹ️ ", use_emoji)
    _print_line(f"{prefix}{msg}", style="cyan", use_emoji=use_emoji, use_color=use_color)


def warn(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit a warning message."""

    prefix = emoji("⚠️ ", use_emoji)
    _print_line(f"{prefix}{msg}", style="yellow", use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit an error message."""

    prefix = emoji("❌ ", use_emoji)
    _print_line(f"{prefix}{msg}", style="red", use_emoji=use_emoji, use_color=use_color)


def debug(msg: str, *, use_color: bool | None = None) -> None:
    """Emit a dimmed debugging line."""

    _print_line(f"[debug] {msg}", style="bright_black", use_emoji=False, use_color=use_color)


def trace(msg: str, *, use_color: bool | None = None) -> None:
    """Emit a dimmed line tracing an external command."""

    _print_line(f"[trace] {msg}", style="bright_black", use_emoji=False, use_color=use_color)


@dataclass(frozen=True, slots=True)
class CLILogger:
    """Adapter around the logging helpers honouring CLI presentation settings.

    Per-path success lines go through :meth:`status` and disappear in quiet
    mode; failures go through :meth:`problem` and are always shown.
    """

    use_emoji: bool = True
    use_color: bool | None = None
    verbosity: Verbosity = Verbosity.NORMAL

    @property
    def quiet(self) -> bool:
        """Return ``True`` when only failures should be printed."""

        return self.verbosity is Verbosity.QUIET

    @property
    def debug_enabled(self) -> bool:
        """Return ``True`` when debug output is enabled."""

        return self.verbosity >= Verbosity.DEBUG

    @property
    def trace_enabled(self) -> bool:
        """Return ``True`` when every executed command should be traced."""

        return self.verbosity >= Verbosity.TRACE

    def echo(self, message: str) -> None:
        """Print ``message`` unless running quietly."""

        if not self.quiet:
            _print_line(message, style=None, use_emoji=self.use_emoji, use_color=self.use_color)

    def status(self, message: str) -> None:
        """Print a per-path success line unless running quietly."""

        self.echo(message)

    def problem(self, message: str) -> None:
        """Print a per-path failure line regardless of verbosity."""

        _print_line(message, style="red", use_emoji=self.use_emoji, use_color=self.use_color)

    def raw(self, message: str) -> None:
        """Print ``message`` verbatim regardless of verbosity."""

        _print_line(message, style=None, use_emoji=self.use_emoji, use_color=self.use_color)

    def info(self, message: str) -> None:
        """Log an informational message when ``--verbose`` or ``--debug`` is set."""

        if self.verbosity >= Verbosity.VERBOSE:
            info(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def warn(self, message: str) -> None:
        """Log a warning message regardless of verbosity."""

        warn(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def fail(self, message: str) -> None:
        """Log a failure message regardless of verbosity."""

        fail(message, use_emoji=self.use_emoji, use_color=self.use_color)

    def debug(self, message: str) -> None:
        """Emit a debug message when debug logging is enabled."""

        if self.debug_enabled:
            debug(message, use_color=self.use_color)

    def trace(self, message: str) -> None:
        """Emit a command trace when ``--trace`` is set."""

        if self.trace_enabled:
            trace(message, use_color=self.use_color)


__all__ = ["CLILogger", "Verbosity", "debug", "emoji", "fail", "info", "trace", "warn"]
