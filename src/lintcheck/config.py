# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and environment loading for lintcheck."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .utils.bool_utils import coerce_bool_literal

DEFAULT_API_URL: Final[str] = "https://api.github.com"

ResolverKind = Literal["job-check-run", "heuristic"]
SuiteMode = Literal["auto", "none"]


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


class GitHubConfig(BaseModel):
    """Repository, credentials and workflow-run identity for API calls."""

    model_config = ConfigDict(validate_assignment=True)

    api_url: str = DEFAULT_API_URL
    repository: str = ""
    token: str = Field(default="", repr=False)
    run_id: str | None = None
    sha: str | None = None
    timeout: float = Field(default=30.0, gt=0)
    in_actions: bool = False

    @property
    def repo_api_url(self) -> str:
        """Return the repository-scoped REST base URL."""

        return f"{self.api_url.rstrip('/')}/repos/{self.repository}"


class CheckSuiteConfig(BaseModel):
    """How the check suite for new check runs is resolved."""

    model_config = ConfigDict(validate_assignment=True)

    resolver: ResolverKind = "job-check-run"
    job_check_run_id: int | None = None
    debug: bool = False
    mode: SuiteMode = "auto"
    job_name_hint: str | None = None
    retries: int = Field(default=3, ge=1)
    delay_ms: int = Field(default=2000, ge=0)


class PublishConfig(BaseModel):
    """Options applied to every published check run."""

    model_config = ConfigDict(validate_assignment=True)

    neutral_check_on_warning: bool = False


class Config(BaseModel):
    """Top-level configuration assembled from the action environment."""

    model_config = ConfigDict(validate_assignment=True)

    github: GitHubConfig = Field(default_factory=GitHubConfig)
    check_suite: CheckSuiteConfig = Field(default_factory=CheckSuiteConfig)
    publish: PublishConfig = Field(default_factory=PublishConfig)


def _input(environ: Mapping[str, str], name: str) -> str | None:
    """Return the action input ``name`` or ``None`` when unset or blank."""

    key = f"INPUT_{name.replace(' ', '_').upper()}"
    value = environ.get(key)
    if value is None or not value.strip():
        return None
    return value.strip()


def _env(environ: Mapping[str, str], name: str) -> str | None:
    value = environ.get(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _parse_bool(value: str | None, name: str, default: bool) -> bool:
    if value is None:
        return default
    try:
        return coerce_bool_literal(value)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a boolean literal, got {value!r}") from exc


def _parse_int(value: str | None, name: str) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from exc


def _parse_job_check_run_id(value: str | None) -> int | None:
    """Return the job check run id, or ``None`` when ``value`` is not an integer.

    A malformed id skips suite grouping instead of failing the run.
    """

    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def load_config(environ: Mapping[str, str] | None = None) -> Config:
    """Build :class:`Config` from GitHub Actions variables and action inputs.

    Args:
        environ: Environment mapping; defaults to :data:`os.environ`.

    Returns:
        Config: Validated configuration.

    Raises:
        ConfigError: If an input cannot be parsed or fails validation.
    """

    env = os.environ if environ is None else environ
    suite_defaults = CheckSuiteConfig()
    retries = _parse_int(_input(env, "check_suite_retries"), "check_suite_retries")
    delay_ms = _parse_int(_input(env, "check_suite_delay_ms"), "check_suite_delay_ms")
    try:
        github = GitHubConfig(
            api_url=_env(env, "GITHUB_API_URL") or DEFAULT_API_URL,
            repository=_env(env, "GITHUB_REPOSITORY") or "",
            token=_input(env, "github_token") or _env(env, "GITHUB_TOKEN") or "",
            run_id=_env(env, "GITHUB_RUN_ID"),
            sha=_env(env, "GITHUB_SHA"),
            in_actions=_parse_bool(_env(env, "GITHUB_ACTIONS"), "GITHUB_ACTIONS", False),
        )
        check_suite = CheckSuiteConfig(
            resolver=_input(env, "check_suite_resolver") or suite_defaults.resolver,
            job_check_run_id=_parse_job_check_run_id(_input(env, "check_suite_job_check_run_id")),
            debug=_parse_bool(_input(env, "check_suite_debug"), "check_suite_debug", False),
            mode=_input(env, "check_suite_mode") or suite_defaults.mode,
            job_name_hint=_input(env, "check_suite_job_name"),
            retries=suite_defaults.retries if retries is None else retries,
            delay_ms=suite_defaults.delay_ms if delay_ms is None else delay_ms,
        )
        publish = PublishConfig(
            neutral_check_on_warning=_parse_bool(
                _input(env, "neutral_check_on_warning"),
                "neutral_check_on_warning",
                False,
            ),
        )
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
    return Config(github=github, check_suite=check_suite, publish=publish)


__all__ = [
    "CheckSuiteConfig",
    "Config",
    "ConfigError",
    "DEFAULT_API_URL",
    "GitHubConfig",
    "PublishConfig",
    "ResolverKind",
    "SuiteMode",
    "load_config",
]
