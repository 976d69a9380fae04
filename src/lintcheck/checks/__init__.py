# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Check suite resolution and check run publication."""

from __future__ import annotations

from .publisher import CheckRunPublisher, PublishError, build_annotations, derive_conclusion
from .suite_resolver import (
    HeuristicSuiteResolver,
    JobCheckRunSuiteResolver,
    SuiteResolutionOptions,
    SuiteResolutionResult,
    SuiteResolver,
    build_suite_resolver,
)
from .suite_strategies import ResolutionLookupError

__all__ = [
    "CheckRunPublisher",
    "HeuristicSuiteResolver",
    "JobCheckRunSuiteResolver",
    "PublishError",
    "ResolutionLookupError",
    "SuiteResolutionOptions",
    "SuiteResolutionResult",
    "SuiteResolver",
    "build_annotations",
    "build_suite_resolver",
    "derive_conclusion",
]
