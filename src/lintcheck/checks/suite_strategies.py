# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Ordered strategies that map a workflow run to its check suite id.

Each strategy implements :class:`SuiteStrategy` and either produces a
:class:`StrategyOutcome` or returns ``None`` so the next strategy can try. A
failed API call inside a strategy surfaces as :class:`ResolutionLookupError`,
which the resolver records and treats as "strategy failed, try next".
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Final, Protocol

from ..github.api import GitHubApi
from ..github.transport import HttpRequestError
from ..logging import ActionLogger

GITHUB_ACTIONS_APP_SLUG: Final[str] = "github-actions"


class ResolutionLookupError(RuntimeError):
    """Raised when an API lookup made while resolving a check suite fails."""

    def __init__(self, lookup: str, cause: HttpRequestError) -> None:
        super().__init__(f"{lookup} failed: {cause}")
        self.lookup = lookup
        self.status_code = cause.status_code


@dataclass(frozen=True, slots=True)
class StrategyOutcome:
    """Check suite id produced by a successful strategy."""

    check_suite_id: int
    head_sha: str | None
    source: str


@dataclass(slots=True)
class SuiteContext:
    """Inputs and per-attempt observations shared by the strategy chain."""

    api: GitHubApi
    logger: ActionLogger
    run_id: str
    head_sha: str | None = None
    job_name_hint: str | None = None
    debug: bool = False
    attempt: int = 1
    candidate_suite_id: int | None = None
    run_head_sha: str | None = None

    def fetch(self, lookup: str, call: Callable[..., Any], *args: object) -> Any:
        """Invoke an API helper, converting transport failures.

        Args:
            lookup: Short label describing the lookup for logs.
            call: Bound :class:`GitHubApi` method.
            *args: Arguments forwarded to ``call``.

        Returns:
            Any: Decoded JSON body.

        Raises:
            ResolutionLookupError: If the request failed.
        """

        try:
            return call(*args)
        except HttpRequestError as exc:
            raise ResolutionLookupError(lookup, exc) from exc

    def debug_event(self, event: str, **fields: object) -> None:
        """Emit a structured debug line tagged with the current attempt."""

        self.logger.debug_event(self.debug, {"event": event, "attempt": self.attempt, **fields})


class SuiteStrategy(Protocol):
    """One step of the suite resolution chain."""

    name: str

    def attempt(self, context: SuiteContext) -> StrategyOutcome | None:
        """Return a resolved suite or ``None`` when this strategy cannot help."""


def suite_id_of(check_run: Mapping[str, Any] | None) -> int | None:
    """Return ``check_suite.id`` of ``check_run`` when it is a positive integer."""

    if not isinstance(check_run, Mapping):
        return None
    suite = check_run.get("check_suite")
    if not isinstance(suite, Mapping):
        return None
    return positive_int(suite.get("id"))


def positive_int(value: object) -> int | None:
    """Return ``value`` when it is a positive integer, excluding booleans."""

    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return None
    return value


def head_sha_of(data: Mapping[str, Any] | None) -> str | None:
    """Return the non-empty ``head_sha`` field of ``data``."""

    if not isinstance(data, Mapping):
        return None
    sha = data.get("head_sha")
    return sha if isinstance(sha, str) and sha else None


def _check_runs_of(payload: Any) -> list[Mapping[str, Any]]:
    if not isinstance(payload, Mapping):
        return []
    runs = payload.get("check_runs")
    if not isinstance(runs, list):
        return []
    return [run for run in runs if isinstance(run, Mapping)]


def is_current_run_check_run(check_run: Mapping[str, Any], run_id: str) -> bool:
    """Return ``True`` when ``check_run`` was created by workflow run ``run_id``.

    The check run must belong to the GitHub Actions app and its details (or
    html) URL must contain ``/actions/runs/<run_id>/``.
    """

    app = check_run.get("app")
    slug = app.get("slug") if isinstance(app, Mapping) else None
    if slug != GITHUB_ACTIONS_APP_SLUG:
        return False
    url = check_run.get("details_url") or check_run.get("html_url") or ""
    return isinstance(url, str) and f"/actions/runs/{run_id}/" in url


def find_current_run_check_run(check_runs: Iterable[Mapping[str, Any]], run_id: str) -> Mapping[str, Any] | None:
    """Return the first check run in ``check_runs`` created by ``run_id``."""

    for check_run in check_runs:
        if is_current_run_check_run(check_run, run_id):
            return check_run
    return None


class JobHintStrategy:
    """Follow the job named by the hint to its check run and read the suite id."""

    name = "job-hint"

    def attempt(self, context: SuiteContext) -> StrategyOutcome | None:
        """List the run's jobs and read the suite of the hinted job's check run.

        Args:
            context: Shared state of the current attempt.

        Returns:
            StrategyOutcome | None: The linked suite, or ``None`` when there is no hint,
            no job of that name, no ``check_run_url`` or no suite on the check run.

        Raises:
            ResolutionLookupError: If a lookup fails.
        """

        hint = context.job_name_hint
        if not hint:
            context.debug_event("suite-strategy-skipped", strategy=self.name, reason="no-job-name-hint")
            return None
        payload = context.fetch("list run jobs", context.api.list_run_jobs, context.run_id)
        raw_jobs = payload.get("jobs") if isinstance(payload, Mapping) else None
        jobs = [job for job in raw_jobs or [] if isinstance(job, Mapping)]
        job_names = [job.get("name") for job in jobs]
        job = next((job for job in jobs if job.get("name") == hint), None)
        if job is None:
            context.debug_event("suite-job-hint-miss", hint=hint, jobNames=job_names)
            return None
        check_run_url = job.get("check_run_url")
        if not isinstance(check_run_url, str) or not check_run_url:
            context.debug_event("suite-job-hint-miss", hint=hint, jobId=job.get("id"), reason="missing-check-run-url")
            return None
        check_run = context.fetch("get job check run", context.api.get_url, check_run_url)
        suite_id = suite_id_of(check_run)
        context.debug_event(
            "suite-job-hint-check-run",
            hint=hint,
            jobId=job.get("id"),
            checkRunId=check_run.get("id") if isinstance(check_run, Mapping) else None,
            checkSuiteId=suite_id,
        )
        if suite_id is None:
            return None
        return StrategyOutcome(check_suite_id=suite_id, head_sha=head_sha_of(check_run), source=self.name)


class RunLookupStrategy:
    """Read the workflow run's suite id and verify it holds one of the run's check runs.

    The id is recorded on the context as the attempt's candidate before it is
    verified, so the resolver can fall back to it once attempts are exhausted.
    """

    name = "run-lookup"

    def attempt(self, context: SuiteContext) -> StrategyOutcome | None:
        """Read the run's ``check_suite_id`` and verify it against the suite's check runs.

        Args:
            context: Shared state of the current attempt; receives the candidate
                and the run's head sha.

        Returns:
            StrategyOutcome | None: The verified suite, or ``None`` when the run has
            no suite or none of its check runs belong to this workflow run.

        Raises:
            ResolutionLookupError: If a lookup fails.
        """

        run = context.fetch("get workflow run", context.api.get_workflow_run, context.run_id)
        candidate = positive_int(run.get("check_suite_id")) if isinstance(run, Mapping) else None
        context.run_head_sha = head_sha_of(run)
        context.debug_event("suite-run-lookup", runId=context.run_id, candidate=candidate)
        if candidate is None:
            return None
        context.candidate_suite_id = candidate

        check_runs = _check_runs_of(
            context.fetch("list suite check runs", context.api.list_suite_check_runs, candidate),
        )
        match = find_current_run_check_run(check_runs, context.run_id)
        context.debug_event(
            "suite-candidate-verification",
            candidate=candidate,
            verified=match is not None,
            checkRunsInspected=len(check_runs),
        )
        if match is None:
            return None
        return StrategyOutcome(
            check_suite_id=candidate,
            head_sha=head_sha_of(match) or context.run_head_sha,
            source=self.name,
        )


class CommitFallbackStrategy:
    """Search the commit's check runs for one created by the current workflow run."""

    name = "commit-fallback"

    def attempt(self, context: SuiteContext) -> StrategyOutcome | None:
        """Match a check run of this workflow run among the commit's check runs.

        Args:
            context: Shared state of the current attempt.

        Returns:
            StrategyOutcome | None: The matched check run's suite, or ``None`` when
            no head sha is known or nothing matches.

        Raises:
            ResolutionLookupError: If a lookup fails.
        """

        sha = context.head_sha or context.run_head_sha
        if not sha:
            context.debug_event("suite-strategy-skipped", strategy=self.name, reason="no-head-sha")
            return None
        check_runs = _check_runs_of(
            context.fetch("list commit check runs", context.api.list_commit_check_runs, sha),
        )
        match = find_current_run_check_run(check_runs, context.run_id)
        suite_id = suite_id_of(match)
        context.debug_event(
            "suite-commit-fallback",
            headSha=sha,
            checkRunsInspected=len(check_runs),
            matchedCheckRunId=match.get("id") if match is not None else None,
            checkSuiteId=suite_id,
        )
        if suite_id is None:
            return None
        return StrategyOutcome(check_suite_id=suite_id, head_sha=head_sha_of(match) or sha, source=self.name)


def default_strategies() -> tuple[SuiteStrategy, ...]:
    """Return the strategy chain in resolution order."""

    return (JobHintStrategy(), RunLookupStrategy(), CommitFallbackStrategy())


__all__ = [
    "CommitFallbackStrategy",
    "GITHUB_ACTIONS_APP_SLUG",
    "JobHintStrategy",
    "ResolutionLookupError",
    "RunLookupStrategy",
    "StrategyOutcome",
    "SuiteContext",
    "SuiteStrategy",
    "default_strategies",
    "find_current_run_check_run",
    "head_sha_of",
    "is_current_run_check_run",
    "positive_int",
    "suite_id_of",
]
