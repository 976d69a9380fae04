# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Build and publish one GitHub check run per linter."""

from __future__ import annotations

from collections.abc import Iterator

from ..core.models import (
    MAX_ANNOTATIONS,
    Annotation,
    CheckRunOutput,
    CheckRunRequest,
    Conclusion,
    LintResult,
    capitalize_first,
    findings_by_level,
)
from ..github.api import GitHubApi
from ..github.diagnostics import RequestDiagnostics, parse_api_error
from ..github.transport import HttpRequestError
from ..logging import ActionLogger


class PublishError(RuntimeError):
    """Raised when a check run could not be created for a linter."""

    def __init__(
        self,
        linter_name: str,
        detail: str,
        *,
        diagnostics: RequestDiagnostics | None = None,
    ) -> None:
        super().__init__(f"Error trying to create GitHub check for {linter_name}: {detail}")
        self.linter_name = linter_name
        self.detail = detail
        self.diagnostics = diagnostics


def _iter_annotations(result: LintResult) -> Iterator[Annotation]:
    for level, findings in findings_by_level(result):
        for finding in findings:
            yield Annotation.from_finding(finding, level)


def build_annotations(result: LintResult) -> tuple[list[Annotation], bool]:
    """Return at most :data:`MAX_ANNOTATIONS` annotations, errors before warnings.

    Args:
        result: Lint result whose findings become annotations.

    Returns:
        tuple[list[Annotation], bool]: Kept annotations and whether any were dropped.
    """

    annotations: list[Annotation] = []
    for annotation in _iter_annotations(result):
        if len(annotations) == MAX_ANNOTATIONS:
            return annotations, True
        annotations.append(annotation)
    return annotations, False


def derive_conclusion(is_success: bool, annotation_count: int, neutral_on_warning: bool) -> Conclusion:
    """Return the check run conclusion.

    A failed lint result always concludes as failure. A successful result with
    annotations concludes as neutral only when ``neutral_on_warning`` is set.
    """

    if not is_success:
        return Conclusion.FAILURE
    if annotation_count > 0 and neutral_on_warning:
        return Conclusion.NEUTRAL
    return Conclusion.SUCCESS


def build_check_run_request(
    linter_name: str,
    head_sha: str,
    annotations: list[Annotation],
    conclusion: Conclusion,
    summary: str,
    check_suite_id: int | None = None,
) -> CheckRunRequest:
    """Assemble the ``POST check-runs`` body for one linter."""

    return CheckRunRequest(
        name=linter_name,
        head_sha=head_sha,
        conclusion=conclusion,
        output=CheckRunOutput(
            title=capitalize_first(summary),
            summary=f"{linter_name} found {summary}",
            annotations=tuple(annotations),
        ),
        check_suite_id=check_suite_id,
    )


def describe_request_failure(error: HttpRequestError) -> str:
    """Return ``error``'s message enriched with request id and API error details.

    Args:
        error: Failed transport request.

    Returns:
        str: Message carrying the request id and parsed ``message`` and
        ``documentation_url`` when available.
    """

    message = str(error)
    request_id = error.diagnostics.request_id
    if request_id:
        message += f" (request id: {request_id})"
    details = parse_api_error(error.body)
    if details is not None:
        if details.message:
            message += f". {details.message}"
        if details.documentation_url:
            message += f" {details.documentation_url}"
    return message


class CheckRunPublisher:
    """Create check runs carrying lint annotations."""

    def __init__(self, api: GitHubApi, *, logger: ActionLogger | None = None) -> None:
        self.api = api
        self.logger = logger or ActionLogger()

    def publish(
        self,
        linter_name: str,
        head_sha: str,
        lint_result: LintResult,
        neutral_on_warning: bool,
        summary: str,
        check_suite_id: int | None = None,
    ) -> None:
        """Create one check run describing ``lint_result``.

        Args:
            linter_name: Name of the check run.
            head_sha: Commit the check run reports on.
            lint_result: Findings and success state of the linter.
            neutral_on_warning: Conclude as neutral when a successful run still has findings.
            summary: Short description such as ``"2 errors and 1 warning"``.
            check_suite_id: Suite to attach the check run to; omitted when ``None``.

        Raises:
            PublishError: If the input is invalid or the request fails.
        """

        if not isinstance(lint_result, LintResult):
            raise PublishError(linter_name, "no lint result was provided")
        if not head_sha:
            raise PublishError(linter_name, "no head commit sha was provided")

        annotations, truncated = build_annotations(lint_result)
        if truncated:
            self.logger.info(
                f"There are more than {MAX_ANNOTATIONS} errors/warnings from {linter_name}. "
                f"Annotations are created for the first {MAX_ANNOTATIONS} issues only.",
            )
        conclusion = derive_conclusion(lint_result.is_success, len(annotations), neutral_on_warning)
        try:
            request = build_check_run_request(
                linter_name,
                head_sha,
                annotations,
                conclusion,
                summary,
                check_suite_id,
            )
        except ValueError as exc:
            raise PublishError(linter_name, str(exc)) from exc

        self.logger.info(
            f"Creating GitHub check with {conclusion.value} conclusion and {len(annotations)} "
            f"annotations for {linter_name}…",
        )
        try:
            self.api.create_check_run(request.to_payload())
        except HttpRequestError as exc:
            detail = describe_request_failure(exc)
            self.logger.error(detail)
            raise PublishError(linter_name, detail, diagnostics=exc.diagnostics) from exc
        self.logger.ok(f"{linter_name} check created successfully")


__all__ = [
    "CheckRunPublisher",
    "PublishError",
    "build_annotations",
    "build_check_run_request",
    "derive_conclusion",
    "describe_request_failure",
]
