# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for the qaflow orchestration package."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

from ..filters import Capability, Filter, RunMode

CONFIG_FILE_NAME: Final[str] = "qaflow.toml"


def _coerce_strings(value: Sequence[str] | str | None, *, field_name: str) -> tuple[str, ...]:
    """Return ``value`` coerced into an immutable tuple of strings.

    Args:
        value: Scalar or sequence read from the configuration file.
        field_name: Field name used in error messages.

    Returns:
        tuple[str, ...]: Normalised string values.

    Raises:
        ValueError: If ``value`` cannot be coerced into a sequence of strings.
    """

    if value is None:
        return ()
    if isinstance(value, str):
        return (value,) if value else ()
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        return tuple(str(entry) for entry in value)
    raise ValueError(f"{field_name} must be a string or a list of strings")


def _coerce_codes(value: Sequence[int] | int | None, *, field_name: str) -> tuple[int, ...]:
    """Return ``value`` coerced into a tuple of integer exit codes.

    Args:
        value: Scalar or sequence of exit codes.
        field_name: Field name used in error messages.

    Returns:
        tuple[int, ...]: Normalised exit codes.

    Raises:
        ValueError: If ``value`` contains anything other than integers.
    """

    if value is None:
        return ()
    if isinstance(value, bool):
        raise ValueError(f"{field_name} must contain integers")
    if isinstance(value, int):
        return (value,)
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        if any(isinstance(entry, bool) or not isinstance(entry, int) for entry in value):
            raise ValueError(f"{field_name} must contain integers")
        return tuple(value)
    raise ValueError(f"{field_name} must be an integer or a list of integers")


class CommandConfig(BaseModel):
    """One ``[commands.NAME]`` table describing an external tool."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Capability
    cmd: tuple[str, ...]
    include: tuple[str, ...]
    exclude: tuple[str, ...] = Field(default_factory=tuple)
    run_mode: RunMode = RunMode.FILES
    chdir: bool = False
    lint_flags: tuple[str, ...] = Field(default_factory=tuple)
    tidy_flags: tuple[str, ...] = Field(default_factory=tuple)
    path_flag: str | None = None
    env: dict[str, str] = Field(default_factory=dict)
    ok_exit_codes: tuple[int, ...]
    lint_failure_exit_codes: tuple[int, ...] = Field(default_factory=tuple)
    expect_stderr: bool = False

    @field_validator("cmd", "include", "exclude", "lint_flags", "tidy_flags", mode="before")
    @classmethod
    def _coerce_string_lists(cls, value: Sequence[str] | str | None, info: ValidationInfo) -> tuple[str, ...]:
        return _coerce_strings(value, field_name=info.field_name)

    @field_validator("ok_exit_codes", "lint_failure_exit_codes", mode="before")
    @classmethod
    def _coerce_exit_codes(cls, value: Sequence[int] | int | None, info: ValidationInfo) -> tuple[int, ...]:
        return _coerce_codes(value, field_name=info.field_name)

    @field_validator("env", mode="before")
    @classmethod
    def _coerce_env(cls, value: object) -> dict[str, str]:
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ValueError("env must be a table of strings")
        return {str(key): str(entry) for key, entry in value.items()}

    @model_validator(mode="after")
    def _validate_contract(self) -> CommandConfig:
        """Check cross-field requirements of a command table.

        Returns:
            CommandConfig: The validated instance.

        Raises:
            ValueError: If required values are missing or contradictory.
        """

        if not self.cmd:
            raise ValueError("cmd must not be empty")
        if not self.include:
            raise ValueError("include must list at least one glob")
        if not self.ok_exit_codes:
            raise ValueError("ok_exit_codes must list at least one exit code")
        overlap = set(self.ok_exit_codes) & set(self.lint_failure_exit_codes)
        if overlap:
            codes = ", ".join(str(code) for code in sorted(overlap))
            raise ValueError(f"exit codes {codes} appear in both ok_exit_codes and lint_failure_exit_codes")
        if self.type is not Capability.TIDY and not self.lint_failure_exit_codes:
            raise ValueError("lint filters must define lint_failure_exit_codes")
        return self

    def to_filter(self, name: str) -> Filter:
        """Return the immutable runtime :class:`Filter` for this table.

        Args:
            name: Table name under ``[commands]``.

        Returns:
            Filter: Runtime descriptor used by the orchestrator.
        """

        return Filter(
            name=name,
            command=self.cmd,
            run_mode=self.run_mode,
            capability=self.type,
            include_globs=self.include,
            exclude_globs=self.exclude,
            ok_exit_codes=frozenset(self.ok_exit_codes),
            lint_failure_exit_codes=frozenset(self.lint_failure_exit_codes),
            lint_flags=self.lint_flags,
            tidy_flags=self.tidy_flags,
            path_flag=self.path_flag or None,
            env=dict(self.env),
            chdir=self.chdir,
            expect_stderr=self.expect_stderr,
        )


class ProjectConfig(BaseModel):
    """Top-level ``qaflow.toml`` document."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    exclude: tuple[str, ...] = Field(default_factory=tuple)
    commands: dict[str, CommandConfig] = Field(default_factory=dict)

    @field_validator("exclude", mode="before")
    @classmethod
    def _coerce_exclude(cls, value: Sequence[str] | str | None) -> tuple[str, ...]:
        return _coerce_strings(value, field_name="exclude")

    def filters(self) -> tuple[Filter, ...]:
        """Return every configured filter in declaration order."""

        return tuple(command.to_filter(name) for name, command in self.commands.items())


__all__ = ["CONFIG_FILE_NAME", "CommandConfig", "ProjectConfig"]
