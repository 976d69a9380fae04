# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for lint result and check run request models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from lintcheck.core.models import (
    CheckRunOutput,
    CheckRunRequest,
    Conclusion,
    Finding,
    LintResult,
    capitalize_first,
    summarize_lint_result,
)


def _finding(line: int = 1) -> Finding:
    return Finding(path="src/app.py", first_line=line, last_line=line, message="boom")


def test_lint_result_from_parser_payload() -> None:
    result = LintResult.from_payload(
        {
            "isSuccess": False,
            "error": [{"path": "a.py", "firstLine": 1, "lastLine": 2, "message": "bad"}],
            "warning": [],
        }
    )

    assert result.is_success is False
    assert result.errors == (Finding(path="a.py", first_line=1, last_line=2, message="bad"),)
    assert result.warnings == ()


def test_lint_result_from_snake_case_payload() -> None:
    result = LintResult.from_payload({"is_success": True, "warnings": [{"path": "b.py", "first_line": 3, "last_line": 3, "message": "meh"}]})

    assert result.is_success is True
    assert len(result.warnings) == 1


def test_lint_result_is_immutable() -> None:
    result = LintResult(is_success=True)

    with pytest.raises(ValidationError):
        result.is_success = False  # type: ignore[misc]


@pytest.mark.parametrize(
    ("errors", "warnings", "expected"),
    [
        (0, 0, "no issues"),
        (1, 0, "1 error"),
        (0, 3, "3 warnings"),
        (2, 1, "2 errors and 1 warning"),
    ],
)
def test_summarize_lint_result(errors: int, warnings: int, expected: str) -> None:
    result = LintResult(
        is_success=errors == 0,
        errors=tuple(_finding(i) for i in range(errors)),
        warnings=tuple(_finding(i) for i in range(warnings)),
    )

    assert summarize_lint_result(result) == expected


def test_capitalize_first() -> None:
    assert capitalize_first("2 errors") == "2 errors"
    assert capitalize_first("no issues") == "No issues"
    assert capitalize_first("") == ""


def _request(check_suite_id: int | None = None) -> CheckRunRequest:
    return CheckRunRequest(
        name="eslint",
        head_sha="abc",
        conclusion=Conclusion.SUCCESS,
        output=CheckRunOutput(title="No issues", summary="eslint found no issues"),
        check_suite_id=check_suite_id,
    )


def test_payload_omits_missing_check_suite_id() -> None:
    payload = _request().to_payload()

    assert "check_suite_id" not in payload
    assert payload["conclusion"] == "success"
    assert payload["output"] == {"title": "No issues", "summary": "eslint found no issues", "annotations": []}


def test_payload_includes_resolved_check_suite_id() -> None:
    assert _request(42).to_payload()["check_suite_id"] == 42


def test_check_suite_id_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        _request(0)
