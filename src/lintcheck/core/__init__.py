# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core models shared by suite resolution and check publication."""

from __future__ import annotations

from .models import (
    MAX_ANNOTATIONS,
    Annotation,
    AnnotationLevel,
    CheckRunOutput,
    CheckRunRequest,
    Conclusion,
    Finding,
    LintResult,
    summarize_lint_result,
)

__all__ = [
    "Annotation",
    "AnnotationLevel",
    "CheckRunOutput",
    "CheckRunRequest",
    "Conclusion",
    "Finding",
    "LintResult",
    "MAX_ANNOTATIONS",
    "summarize_lint_result",
]
