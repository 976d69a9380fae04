# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Publish linter results as GitHub check runs grouped under the current check suite."""

from __future__ import annotations

from .checks.publisher import CheckRunPublisher, PublishError
from .checks.suite_resolver import (
    HeuristicSuiteResolver,
    JobCheckRunSuiteResolver,
    SuiteResolutionOptions,
    SuiteResolutionResult,
)
from .core.models import Finding, LintResult

__all__ = [
    "CheckRunPublisher",
    "Finding",
    "HeuristicSuiteResolver",
    "JobCheckRunSuiteResolver",
    "LintResult",
    "PublishError",
    "SuiteResolutionOptions",
    "SuiteResolutionResult",
]
