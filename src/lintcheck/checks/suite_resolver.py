# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve the check suite that new check runs should be attached to.

Two resolvers exist and a deployment picks exactly one of them:

* :class:`JobCheckRunSuiteResolver` reads the suite straight from the current
  job's own check run. One request, no retries, no heuristics.
* :class:`HeuristicSuiteResolver` walks an ordered strategy chain with retries
  to tolerate the delay before job and check-run metadata becomes visible.

Neither resolver raises: lookup failures degrade to an unresolved result and a
single warning, and check runs are then created without ``check_suite_id``.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Literal, Protocol

from tenacity import RetryCallState, Retrying, retry_if_result, stop_after_attempt, wait_fixed

from ..config import CheckSuiteConfig, Config
from ..github.api import GitHubApi
from ..github.transport import HttpRequestError
from ..logging import ActionLogger
from .suite_strategies import (
    ResolutionLookupError,
    StrategyOutcome,
    SuiteContext,
    SuiteStrategy,
    default_strategies,
    head_sha_of,
    positive_int,
    suite_id_of,
)

UNGROUPED_SUFFIX = "creating check runs without check_suite_id."


@dataclass(frozen=True, slots=True)
class SuiteResolutionOptions:
    """Per-invocation inputs for check suite resolution."""

    job_check_run_id: int | None = None
    job_name_hint: str | None = None
    mode: Literal["auto", "none"] = "auto"
    debug: bool = False
    retries: int = 3
    delay_ms: int = 2000
    head_sha: str | None = None
    run_id: str | None = None

    def __post_init__(self) -> None:
        if self.retries < 1:
            raise ValueError("retries must be at least 1")
        if self.delay_ms < 0:
            raise ValueError("delay_ms must not be negative")

    @classmethod
    def from_config(cls, config: Config, *, head_sha: str | None = None) -> SuiteResolutionOptions:
        """Build options from the loaded configuration.

        Args:
            config: Loaded lintcheck configuration.
            head_sha: Commit to search in the commit fallback; defaults to ``GITHUB_SHA``.

        Returns:
            SuiteResolutionOptions: Options threaded into :meth:`SuiteResolver.resolve`.
        """

        suite: CheckSuiteConfig = config.check_suite
        return cls(
            job_check_run_id=suite.job_check_run_id,
            job_name_hint=suite.job_name_hint,
            mode=suite.mode,
            debug=suite.debug,
            retries=suite.retries,
            delay_ms=suite.delay_ms,
            head_sha=head_sha or config.github.sha,
            run_id=config.github.run_id,
        )


@dataclass(frozen=True, slots=True)
class SuiteResolutionResult:
    """Resolved suite id and the head sha of the check run it was read from."""

    check_suite_id: int | None = None
    check_run_head_sha: str | None = None

    def as_dict(self) -> dict[str, int | str | None]:
        """Return the result keyed the way the action outputs expose it.

        Returns:
            dict[str, int | str | None]: ``checkSuiteId`` and ``checkRunHeadSha``.
        """

        return {"checkSuiteId": self.check_suite_id, "checkRunHeadSha": self.check_run_head_sha}


@dataclass(slots=True)
class _AttemptLog:
    count: int = 0
    candidate: int | None = None


class SuiteResolver(Protocol):
    """Capability shared by both resolvers."""

    def resolve(self, options: SuiteResolutionOptions) -> SuiteResolutionResult:
        """Return the suite for ``options``; never raises."""


class JobCheckRunSuiteResolver:
    """Read the check suite from the current job's own check run."""

    def __init__(self, api: GitHubApi, *, logger: ActionLogger | None = None) -> None:
        self.api = api
        self.logger = logger or ActionLogger()

    def resolve(self, options: SuiteResolutionOptions) -> SuiteResolutionResult:
        """Fetch ``check-runs/{job_check_run_id}`` and read its suite id and head sha.

        Args:
            options: Resolution options; only ``job_check_run_id`` and ``debug`` are used.

        Returns:
            SuiteResolutionResult: Resolved ids, or an empty result when the id is
            missing, the lookup fails, or the check run carries no suite.
        """

        debug = options.debug
        job_check_run_id = positive_int(options.job_check_run_id)
        if job_check_run_id is None:
            self.logger.debug_event(
                debug,
                {"event": "suite-resolution-skipped", "reason": "missing-job-check-run-id"},
            )
            return SuiteResolutionResult()

        self.logger.debug_event(debug, {"event": "suite-resolution-start", "jobCheckRunId": job_check_run_id})
        warning = (
            f"Check suite grouping skipped: could not resolve check suite from job check run id "
            f"{job_check_run_id}; {UNGROUPED_SUFFIX}"
        )
        try:
            check_run = self.api.get_check_run(job_check_run_id)
        except HttpRequestError as exc:
            self.logger.debug_event(
                debug,
                {
                    "event": "suite-resolution-error",
                    "jobCheckRunId": job_check_run_id,
                    "statusCode": exc.status_code,
                    "errorMessage": str(exc),
                },
            )
            self.logger.warn(warning)
            return SuiteResolutionResult()

        check_suite_id = suite_id_of(check_run)
        head_sha = head_sha_of(check_run)
        self.logger.debug_event(
            debug,
            {
                "event": "suite-resolution-result",
                "jobCheckRunId": job_check_run_id,
                "checkSuiteId": check_suite_id,
                "checkRunHeadSha": head_sha,
            },
        )
        if check_suite_id is None:
            self.logger.warn(warning)
        return SuiteResolutionResult(check_suite_id=check_suite_id, check_run_head_sha=head_sha)


class HeuristicSuiteResolver:
    """Resolve the suite through an ordered strategy chain with retries.

    Each attempt runs the strategies in order and stops at the first one that
    produces a suite. Between unsuccessful attempts the resolver sleeps for
    ``delay_ms``. A run-lookup candidate observed in any attempt is returned
    unverified once attempts are exhausted.
    """

    def __init__(
        self,
        api: GitHubApi,
        *,
        logger: ActionLogger | None = None,
        sleep: Callable[[float], None] = time.sleep,
        strategies: Sequence[SuiteStrategy] | None = None,
    ) -> None:
        self.api = api
        self.logger = logger or ActionLogger()
        self.sleep = sleep
        self.strategies: tuple[SuiteStrategy, ...] = (
            tuple(strategies) if strategies is not None else default_strategies()
        )

    def resolve(self, options: SuiteResolutionOptions) -> SuiteResolutionResult:
        """Resolve the check suite of workflow run ``options.run_id``.

        Args:
            options: Resolution options.

        Returns:
            SuiteResolutionResult: The first verified suite, else the remembered
            run candidate, else an empty result.
        """

        debug = options.debug
        run_id = options.run_id
        if options.mode == "none" or not run_id:
            self.logger.debug_event(
                debug,
                {
                    "event": "suite-resolution-skipped",
                    "reason": "mode-none" if options.mode == "none" else "missing-run-id",
                },
            )
            return SuiteResolutionResult()

        self.logger.debug_event(
            debug,
            {
                "event": "suite-resolution-start",
                "runId": run_id,
                "jobNameHint": options.job_name_hint,
                "headSha": options.head_sha,
                "retries": options.retries,
                "delayMs": options.delay_ms,
            },
        )
        attempts = _AttemptLog()

        def run_attempt() -> SuiteResolutionResult | None:
            attempts.count += 1
            context = SuiteContext(
                api=self.api,
                logger=self.logger,
                run_id=run_id,
                head_sha=options.head_sha,
                job_name_hint=options.job_name_hint,
                debug=debug,
                attempt=attempts.count,
            )
            context.debug_event("suite-attempt-start")
            outcome = self._run_chain(context)
            if context.candidate_suite_id is not None:
                attempts.candidate = context.candidate_suite_id
            context.debug_event("suite-attempt-end", resolved=outcome is not None, candidate=attempts.candidate)
            if outcome is None:
                return None
            self.logger.debug_event(
                debug,
                {
                    "event": "suite-resolution-result",
                    "checkSuiteId": outcome.check_suite_id,
                    "checkRunHeadSha": outcome.head_sha,
                    "source": outcome.source,
                    "attempt": attempts.count,
                },
            )
            return SuiteResolutionResult(check_suite_id=outcome.check_suite_id, check_run_head_sha=outcome.head_sha)

        def schedule_retry(retry_state: RetryCallState) -> None:
            self.logger.debug_event(
                debug,
                {"event": "suite-retry-scheduled", "attempt": retry_state.attempt_number, "delayMs": options.delay_ms},
            )

        def exhausted(retry_state: RetryCallState) -> SuiteResolutionResult:
            return self._fallback(run_id, attempts.candidate, retry_state.attempt_number, debug=debug)

        retryer = Retrying(
            stop=stop_after_attempt(options.retries),
            wait=wait_fixed(options.delay_ms / 1000),
            retry=retry_if_result(lambda result: result is None),
            sleep=self.sleep,
            before_sleep=schedule_retry,
            retry_error_callback=exhausted,
        )
        return retryer(run_attempt)

    def _fallback(self, run_id: str, candidate: int | None, attempts: int, *, debug: bool) -> SuiteResolutionResult:
        if candidate is not None:
            self.logger.debug_event(
                debug,
                {"event": "suite-resolution-result", "checkSuiteId": candidate, "source": "run-candidate"},
            )
            self.logger.warn(
                f"Check suite not verified: using run candidate suite {candidate} from workflow run "
                f"{run_id} after {attempts} attempt(s).",
            )
            return SuiteResolutionResult(check_suite_id=candidate)

        self.logger.debug_event(debug, {"event": "suite-resolution-result", "checkSuiteId": None})
        self.logger.warn(
            f"Check suite grouping skipped: could not resolve check suite for workflow run {run_id} "
            f"after {attempts} attempt(s); {UNGROUPED_SUFFIX}",
        )
        return SuiteResolutionResult()

    def _run_chain(self, context: SuiteContext) -> StrategyOutcome | None:
        for strategy in self.strategies:
            try:
                outcome = strategy.attempt(context)
            except ResolutionLookupError as exc:
                context.debug_event(
                    "suite-strategy-result",
                    strategy=strategy.name,
                    outcome="error",
                    statusCode=exc.status_code,
                    errorMessage=str(exc),
                )
                continue
            context.debug_event(
                "suite-strategy-result",
                strategy=strategy.name,
                outcome="resolved" if outcome is not None else "no-match",
                checkSuiteId=outcome.check_suite_id if outcome is not None else None,
            )
            if outcome is not None:
                return outcome
        return None


def build_suite_resolver(
    config: CheckSuiteConfig,
    api: GitHubApi,
    *,
    logger: ActionLogger | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> SuiteResolver:
    """Return the resolver selected by ``config.resolver``."""

    if config.resolver == "heuristic":
        return HeuristicSuiteResolver(api, logger=logger, sleep=sleep)
    return JobCheckRunSuiteResolver(api, logger=logger)


__all__ = [
    "HeuristicSuiteResolver",
    "JobCheckRunSuiteResolver",
    "SuiteResolutionOptions",
    "SuiteResolutionResult",
    "SuiteResolver",
    "build_suite_resolver",
]
