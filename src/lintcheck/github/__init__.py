# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""GitHub REST transport, diagnostics and endpoint helpers."""

from __future__ import annotations

from .api import GitHubApi
from .diagnostics import RequestDiagnostics, sanitize_headers
from .transport import HttpRequestError, HttpResponse, HttpxTransport, Transport

__all__ = [
    "GitHubApi",
    "HttpRequestError",
    "HttpResponse",
    "HttpxTransport",
    "RequestDiagnostics",
    "Transport",
    "sanitize_headers",
]
