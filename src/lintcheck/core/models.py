# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the lintcheck package."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import TypeAliasType

JsonScalar = TypeAliasType("JsonScalar", "str | int | float | bool | None")
JsonValue = TypeAliasType("JsonValue", "JsonScalar | list[JsonValue] | dict[str, JsonValue]")

MAX_ANNOTATIONS: Final[int] = 50


class AnnotationLevel(str, Enum):
    """Severity levels understood by the GitHub checks API."""

    FAILURE = "failure"
    WARNING = "warning"


class Conclusion(str, Enum):
    """Final state reported for a completed check run."""

    SUCCESS = "success"
    FAILURE = "failure"
    NEUTRAL = "neutral"


class Finding(BaseModel):
    """Single linter finding normalised by the lint-parsing collaborator."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    path: str
    first_line: int = Field(alias="firstLine")
    last_line: int = Field(alias="lastLine")
    message: str


class LintResult(BaseModel):
    """Outcome of running one linter, read-only to check publication."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    is_success: bool = Field(alias="isSuccess")
    errors: tuple[Finding, ...] = Field(default_factory=tuple)
    warnings: tuple[Finding, ...] = Field(default_factory=tuple)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> LintResult:
        """Build a result from a JSON payload.

        Both the ``{isSuccess, error, warning}`` layout written by the lint
        parsers and the snake_case ``{is_success, errors, warnings}`` layout are
        accepted.

        Args:
            payload: Decoded JSON object describing one lint run.

        Returns:
            LintResult: Validated lint result.
        """

        data = dict(payload)
        if "error" in data and "errors" not in data:
            data["errors"] = data.pop("error")
        if "warning" in data and "warnings" not in data:
            data["warnings"] = data.pop("warning")
        return cls.model_validate(data)


class Annotation(BaseModel):
    """Line-range comment attached to a check run's output."""

    model_config = ConfigDict(frozen=True)

    path: str
    start_line: int
    end_line: int
    annotation_level: AnnotationLevel
    message: str

    @classmethod
    def from_finding(cls, finding: Finding, level: AnnotationLevel) -> Annotation:
        """Return the annotation describing ``finding`` at ``level``."""

        return cls(
            path=finding.path,
            start_line=finding.first_line,
            end_line=finding.last_line,
            annotation_level=level,
            message=finding.message,
        )


class CheckRunOutput(BaseModel):
    """Title, summary and annotations rendered on the check run page."""

    model_config = ConfigDict(frozen=True)

    title: str
    summary: str
    annotations: tuple[Annotation, ...] = Field(default_factory=tuple, max_length=MAX_ANNOTATIONS)


class CheckRunRequest(BaseModel):
    """Body of a ``POST check-runs`` request."""

    model_config = ConfigDict(frozen=True)

    name: str
    head_sha: str
    conclusion: Conclusion
    output: CheckRunOutput
    check_suite_id: int | None = Field(default=None, gt=0)

    def to_payload(self) -> dict[str, JsonValue]:
        """Return the JSON body sent to the API.

        ``check_suite_id`` is only present when a suite id was resolved; it is
        never serialised as ``null``.

        Returns:
            dict[str, JsonValue]: JSON-compatible request body.
        """

        payload: dict[str, JsonValue] = self.model_dump(mode="json", exclude={"check_suite_id"})
        if self.check_suite_id is not None:
            payload["check_suite_id"] = self.check_suite_id
        return payload


def _pluralize(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def summarize_lint_result(result: LintResult) -> str:
    """Return a short description of the findings in ``result``.

    Args:
        result: Lint result to describe.

    Returns:
        str: ``"no issues"`` or counts such as ``"2 errors and 1 warning"``.
    """

    parts: list[str] = []
    if result.errors:
        parts.append(_pluralize(len(result.errors), "error"))
    if result.warnings:
        parts.append(_pluralize(len(result.warnings), "warning"))
    if not parts:
        return "no issues"
    return " and ".join(parts)


def capitalize_first(text: str) -> str:
    """Return ``text`` with its first character upper-cased."""

    return text[:1].upper() + text[1:]


def findings_by_level(result: LintResult) -> Sequence[tuple[AnnotationLevel, Sequence[Finding]]]:
    """Return findings grouped by annotation level, errors first."""

    return (
        (AnnotationLevel.FAILURE, result.errors),
        (AnnotationLevel.WARNING, result.warnings),
    )


__all__ = [
    "Annotation",
    "AnnotationLevel",
    "CheckRunOutput",
    "CheckRunRequest",
    "Conclusion",
    "Finding",
    "JsonValue",
    "LintResult",
    "MAX_ANNOTATIONS",
    "capitalize_first",
    "findings_by_level",
    "summarize_lint_result",
]
