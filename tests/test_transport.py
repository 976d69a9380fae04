# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the httpx-backed transport."""

from __future__ import annotations

import json

import httpx
import pytest

from lintcheck.github.diagnostics import REDACTED
from lintcheck.github.transport import HttpRequestError, HttpxTransport

URL = "https://api.github.test/repos/octo/repo/check-runs"
HEADERS = {"Authorization": "Bearer secret", "Accept": "application/vnd.github+json"}


def _transport(handler) -> HttpxTransport:
    return HttpxTransport(client=httpx.Client(transport=httpx.MockTransport(handler)))


def test_request_returns_decoded_json() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json={"id": 7})

    response = _transport(handler).request(URL, method="POST", headers=HEADERS, body={"name": "eslint"})

    assert response.status_code == 201
    assert response.data == {"id": 7}
    assert seen[0].method == "POST"
    assert json.loads(seen[0].content) == {"name": "eslint"}
    assert seen[0].headers["Authorization"] == "Bearer secret"


def test_empty_body_decodes_to_none() -> None:
    response = _transport(lambda request: httpx.Response(204)).request(URL)

    assert response.data is None


def test_non_success_status_raises_with_sanitised_context() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            422,
            json={"message": "Validation Failed"},
            headers={"X-GitHub-Request-Id": "AB:CD", "Set-Cookie": "s=1"},
        )

    with pytest.raises(HttpRequestError) as excinfo:
        _transport(handler).request(URL, method="POST", headers=HEADERS, body={})

    error = excinfo.value
    assert str(error) == "Received status code 422"
    assert error.status_code == 422
    assert error.diagnostics.method == "POST"
    assert error.diagnostics.url == URL
    assert error.diagnostics.headers == {"Authorization": REDACTED, "Accept": "application/vnd.github+json"}
    assert error.diagnostics.response_headers is not None
    assert error.diagnostics.response_headers["set-cookie"] == REDACTED
    assert error.diagnostics.request_id == "AB:CD"
    assert json.loads(error.body or "") == {"message": "Validation Failed"}


def test_network_failure_raises_without_response_context() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(HttpRequestError) as excinfo:
        _transport(handler).request(URL, headers=HEADERS)

    error = excinfo.value
    assert "connection refused" in str(error)
    assert error.status_code is None
    assert error.diagnostics.response_headers is None
    assert error.diagnostics.headers == {"Authorization": REDACTED, "Accept": "application/vnd.github+json"}
    assert isinstance(error.__cause__, httpx.ConnectError)


def test_malformed_url_raises_request_error() -> None:
    transport = _transport(lambda request: httpx.Response(200, json={}))

    with pytest.raises(HttpRequestError) as excinfo:
        transport.request("https://api.github.com:bad/x", headers=HEADERS)

    error = excinfo.value
    assert error.status_code is None
    assert error.diagnostics.url == "https://api.github.com:bad/x"
    assert isinstance(error.__cause__, httpx.InvalidURL)
