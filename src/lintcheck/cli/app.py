# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application entry point wiring suite resolution and check publication."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer

from ..checks.publisher import CheckRunPublisher, PublishError
from ..checks.suite_resolver import SuiteResolutionOptions, SuiteResolutionResult, build_suite_resolver
from ..config import Config
from ..core.models import summarize_lint_result
from ..github.api import GitHubApi
from ..logging import ActionLogger
from . import shared
from .shared import CLIError

app = typer.Typer(
    help="Publish linter results as GitHub check runs.",
    no_args_is_help=True,
    add_completion=False,
)


def _resolve(config: Config, api: GitHubApi, logger: ActionLogger, head_sha: str | None) -> SuiteResolutionResult:
    resolver = build_suite_resolver(config.check_suite, api, logger=logger)
    return resolver.resolve(SuiteResolutionOptions.from_config(config, head_sha=head_sha))


@app.command("resolve-suite")
def resolve_suite(
    sha: Annotated[str | None, typer.Option("--sha", help="Commit searched by the commit fallback.")] = None,
    debug: Annotated[
        bool | None,
        typer.Option("--debug/--no-debug", help="Emit [check-suite-debug] lines."),
    ] = None,
) -> None:
    """Resolve the check suite of the current workflow run and print it as JSON."""

    try:
        config = shared.load_cli_config(debug=debug)
    except CLIError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=exc.exit_code) from exc
    logger = shared.build_logger(config.github)
    with shared.build_transport(config.github) as transport:
        result = _resolve(config, GitHubApi(config.github, transport), logger, sha)
    typer.echo(json.dumps(result.as_dict()))


@app.command("publish")
def publish(
    linter: Annotated[str, typer.Argument(help="Linter name used as the check run name.")],
    result_file: Annotated[Path, typer.Argument(help="Lint result JSON file.")],
    summary: Annotated[
        str | None,
        typer.Option("--summary", help="Summary text; derived from the findings when omitted."),
    ] = None,
    sha: Annotated[str | None, typer.Option("--sha", help="Commit to report on.")] = None,
    check_suite_id: Annotated[
        int | None,
        typer.Option("--check-suite-id", min=1, help="Attach to this suite instead of resolving one."),
    ] = None,
    resolve: Annotated[
        bool,
        typer.Option("--resolve-suite/--no-resolve-suite", help="Resolve the current check suite first."),
    ] = True,
    neutral_on_warning: Annotated[
        bool | None,
        typer.Option("--neutral-on-warning/--no-neutral-on-warning", help="Conclude as neutral on warnings."),
    ] = None,
    debug: Annotated[
        bool | None,
        typer.Option("--debug/--no-debug", help="Emit [check-suite-debug] lines."),
    ] = None,
) -> None:
    """Publish one linter's results as a check run.

    The head sha defaults to the head of the resolved job check run, then to
    ``GITHUB_SHA``.
    """

    try:
        config = shared.load_cli_config(debug=debug)
        lint_result = shared.read_lint_result(result_file)
    except CLIError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=exc.exit_code) from exc

    logger = shared.build_logger(config.github)
    neutral = config.publish.neutral_check_on_warning if neutral_on_warning is None else neutral_on_warning
    with shared.build_transport(config.github) as transport:
        api = GitHubApi(config.github, transport)
        resolution = SuiteResolutionResult(check_suite_id=check_suite_id)
        if check_suite_id is None and resolve:
            resolution = _resolve(config, api, logger, sha)
        head_sha = sha or resolution.check_run_head_sha or config.github.sha
        if not head_sha:
            typer.echo("No commit sha available; pass --sha or set GITHUB_SHA", err=True)
            raise typer.Exit(code=2)
        try:
            CheckRunPublisher(api, logger=logger).publish(
                linter,
                head_sha,
                lint_result,
                neutral,
                summary or summarize_lint_result(lint_result),
                resolution.check_suite_id,
            )
        except PublishError as exc:
            typer.echo(str(exc), err=True)
            raise typer.Exit(code=1) from exc


__all__ = ["app"]
