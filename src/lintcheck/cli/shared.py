# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (errors, configuration, services)."""

from __future__ import annotations

import json
from pathlib import Path

from ..config import Config, ConfigError, GitHubConfig, load_config
from ..core.models import LintResult
from ..github.transport import HttpxTransport
from ..logging import ActionLogger


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(message)
        self.exit_code = exit_code


def load_cli_config(*, debug: bool | None = None) -> Config:
    """Load configuration from the environment, applying CLI overrides.

    Raises:
        CLIError: If the environment holds invalid configuration.
    """

    try:
        config = load_config()
    except ConfigError as exc:
        raise CLIError(f"Invalid configuration: {exc}", exit_code=2) from exc
    if debug is not None:
        config.check_suite.debug = debug
    if not config.github.repository:
        raise CLIError("GITHUB_REPOSITORY is not set", exit_code=2)
    return config


def build_transport(config: GitHubConfig) -> HttpxTransport:
    """Return the HTTP transport used by CLI commands."""

    return HttpxTransport(timeout=config.timeout)


def build_logger(config: GitHubConfig) -> ActionLogger:
    """Return a logger emitting workflow commands when running inside GitHub Actions."""

    return ActionLogger(use_emoji=not config.in_actions, workflow_commands=config.in_actions)


def read_lint_result(path: Path) -> LintResult:
    """Read a lint result JSON file written by the lint parsers.

    Raises:
        CLIError: If the file is missing or does not describe a lint result.
    """

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise CLIError(f"Could not read lint result {path}: {exc}", exit_code=2) from exc
    except ValueError as exc:
        raise CLIError(f"Invalid JSON in {path}: {exc}", exit_code=2) from exc
    if not isinstance(payload, dict):
        raise CLIError(f"Invalid lint result in {path}: expected a JSON object", exit_code=2)
    try:
        return LintResult.from_payload(payload)
    except ValueError as exc:
        raise CLIError(f"Invalid lint result in {path}: {exc}", exit_code=2) from exc


__all__ = ["CLIError", "build_logger", "build_transport", "load_cli_config", "read_lint_result"]
