# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Capture sanitised request/response context for failed API calls."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Final

SENSITIVE_HEADER_KEYS: Final[tuple[str, ...]] = ("authorization", "token", "cookie", "set-cookie")
REDACTED: Final[str] = "[redacted]"
REQUEST_ID_HEADER: Final[str] = "x-github-request-id"


@dataclass(frozen=True, slots=True)
class RequestDiagnostics:
    """Safe description of a request and, when one arrived, its response."""

    url: str
    method: str
    headers: dict[str, str] | None
    status_code: int | None = None
    response_headers: dict[str, str] | None = None

    @property
    def request_id(self) -> str | None:
        """Return the platform-assigned request id from the response headers."""

        return find_request_id(self.response_headers)


@dataclass(frozen=True, slots=True)
class ApiErrorDetails:
    """Human readable fields extracted from a JSON API error body."""

    message: str | None
    documentation_url: str | None


def is_sensitive_header(name: str) -> bool:
    """Return ``True`` when header ``name`` may carry credentials."""

    lowered = name.lower()
    return any(key in lowered for key in SENSITIVE_HEADER_KEYS)


def sanitize_headers(headers: Mapping[str, str] | None) -> dict[str, str] | None:
    """Return a copy of ``headers`` with sensitive values redacted.

    Args:
        headers: Request or response headers; ``None`` when unavailable.

    Returns:
        dict[str, str] | None: Headers with credential-bearing values replaced by
        :data:`REDACTED`, or ``None`` when no headers were supplied.
    """

    if headers is None:
        return None
    return {key: REDACTED if is_sensitive_header(key) else value for key, value in headers.items()}


def capture_request_context(
    url: object,
    *,
    method: str | None,
    headers: Mapping[str, str] | None,
    status_code: int | None = None,
    response_headers: Mapping[str, str] | None = None,
) -> RequestDiagnostics:
    """Build :class:`RequestDiagnostics` for a request that failed.

    Args:
        url: Request URL (string or URL object).
        method: HTTP method, ``GET`` when unspecified.
        headers: Headers sent with the request.
        status_code: Response status when a response was received.
        response_headers: Response headers when a response was received.

    Returns:
        RequestDiagnostics: Sanitised request and response metadata.
    """

    return RequestDiagnostics(
        url=str(url),
        method=method or "GET",
        headers=sanitize_headers(headers),
        status_code=status_code,
        response_headers=sanitize_headers(response_headers),
    )


def find_request_id(headers: Mapping[str, str] | None) -> str | None:
    """Return the ``x-github-request-id`` header value, matched case-insensitively."""

    if not headers:
        return None
    for key, value in headers.items():
        if key.lower() == REQUEST_ID_HEADER:
            return value
    return None


def parse_api_error(body: str | bytes | None) -> ApiErrorDetails | None:
    """Extract ``message`` and ``documentation_url`` from an API error body.

    Args:
        body: Raw response body.

    Returns:
        ApiErrorDetails | None: Parsed details, or ``None`` when the body is empty,
        not JSON, or not a JSON object.
    """

    if not body:
        return None
    try:
        data = json.loads(body)
    except (TypeError, ValueError):
        return None
    if not isinstance(data, dict):
        return None
    message = data.get("message")
    documentation_url = data.get("documentation_url")
    return ApiErrorDetails(
        message=message if isinstance(message, str) and message else None,
        documentation_url=documentation_url if isinstance(documentation_url, str) and documentation_url else None,
    )


__all__ = [
    "ApiErrorDetails",
    "REDACTED",
    "REQUEST_ID_HEADER",
    "RequestDiagnostics",
    "SENSITIVE_HEADER_KEYS",
    "capture_request_context",
    "find_request_id",
    "is_sensitive_header",
    "parse_api_error",
    "sanitize_headers",
]
