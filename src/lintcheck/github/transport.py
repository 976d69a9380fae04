# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""HTTP transport used for all GitHub API calls."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import TracebackType
from typing import Any, Protocol

import httpx

from .diagnostics import RequestDiagnostics, capture_request_context

LOGGER = logging.getLogger(__name__)

# InvalidURL, StreamError and CookieConflict do not derive from httpx.HTTPError.
CLIENT_ERRORS: tuple[type[Exception], ...] = (
    httpx.HTTPError,
    httpx.InvalidURL,
    httpx.StreamError,
    httpx.CookieConflict,
)


@dataclass(frozen=True, slots=True)
class HttpResponse:
    """Successful response with its decoded JSON body."""

    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    data: Any = None


class HttpRequestError(RuntimeError):
    """Raised when a request fails at the network level or returns a non-2xx status."""

    def __init__(self, message: str, *, diagnostics: RequestDiagnostics, body: str | None = None) -> None:
        super().__init__(message)
        self.diagnostics = diagnostics
        self.body = body

    @property
    def status_code(self) -> int | None:
        """Return the response status, ``None`` when no response arrived."""

        return self.diagnostics.status_code


class Transport(Protocol):
    """Minimal request capability consumed by the API facade."""

    def request(
        self,
        url: str,
        *,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
        body: Any = None,
    ) -> HttpResponse:
        """Send one request and return the decoded response or raise :class:`HttpRequestError`."""


class HttpxTransport:
    """Synchronous :mod:`httpx` transport rejecting non-2xx responses."""

    def __init__(self, *, timeout: float = 30.0, client: httpx.Client | None = None) -> None:
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout, follow_redirects=True)

    def request(
        self,
        url: str,
        *,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
        body: Any = None,
    ) -> HttpResponse:
        """Send ``method`` to ``url`` with an optional JSON ``body``.

        Args:
            url: Absolute request URL.
            method: HTTP method.
            headers: Request headers.
            body: JSON-compatible payload, omitted when ``None``.

        Returns:
            HttpResponse: Status, headers and decoded JSON body (``None`` when empty).

        Raises:
            HttpRequestError: If the URL is malformed, the request fails or the status is not 2xx.
        """

        LOGGER.debug("%s %s", method, url)
        try:
            response = self._client.request(method, url, headers=dict(headers or {}), json=body)
        except CLIENT_ERRORS as exc:
            diagnostics = capture_request_context(url, method=method, headers=headers)
            raise HttpRequestError(str(exc) or type(exc).__name__, diagnostics=diagnostics) from exc

        response_headers = dict(response.headers.items())
        if not response.is_success:
            diagnostics = capture_request_context(
                url,
                method=method,
                headers=headers,
                status_code=response.status_code,
                response_headers=response_headers,
            )
            raise HttpRequestError(
                f"Received status code {response.status_code}",
                diagnostics=diagnostics,
                body=response.text,
            )

        try:
            data = response.json() if response.content else None
        except ValueError as exc:
            diagnostics = capture_request_context(
                url,
                method=method,
                headers=headers,
                status_code=response.status_code,
                response_headers=response_headers,
            )
            raise HttpRequestError(f"Invalid JSON response: {exc}", diagnostics=diagnostics) from exc
        return HttpResponse(status_code=response.status_code, headers=response_headers, data=data)

    def close(self) -> None:
        """Close the underlying client when this transport created it."""

        if self._owns_client:
            self._client.close()

    def __enter__(self) -> HttpxTransport:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()


__all__ = ["HttpRequestError", "HttpResponse", "HttpxTransport", "Transport"]
