# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import pytest

from lintcheck.config import GitHubConfig
from lintcheck.github.api import GitHubApi
from lintcheck.github.diagnostics import capture_request_context
from lintcheck.github.transport import HttpRequestError, HttpResponse

API_URL = "https://api.github.test"
REPOSITORY = "octo/repo"
REPO_URL = f"{API_URL}/repos/{REPOSITORY}"


@dataclass(frozen=True, slots=True)
class RecordedCall:
    """Request captured by :class:`FakeTransport`."""

    method: str
    url: str
    headers: dict[str, str]
    body: Any

    @property
    def path(self) -> str:
        return self.url.removeprefix(f"{REPO_URL}/")


class FakeTransport:
    """In-memory transport answering repository-relative routes.

    Each route holds a queue of responses; the last one is repeated once the
    queue is drained. Exceptions in the queue are raised. Unknown routes fail
    with a 404 :class:`HttpRequestError`.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], list[object]] = {}
        self.calls: list[RecordedCall] = []

    def add(self, path: str, *responses: object, method: str = "GET") -> FakeTransport:
        self.routes.setdefault((method, path), []).extend(responses)
        return self

    def request(
        self,
        url: str,
        *,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
        body: Any = None,
    ) -> HttpResponse:
        call = RecordedCall(method=method, url=url, headers=dict(headers or {}), body=body)
        self.calls.append(call)
        queue = self.routes.get((method, call.path))
        if not queue:
            raise HttpRequestError(
                "Received status code 404",
                diagnostics=capture_request_context(
                    url,
                    method=method,
                    headers=headers,
                    status_code=404,
                    response_headers={},
                ),
                body='{"message": "Not Found"}',
            )
        response = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(response, BaseException):
            raise response
        return HttpResponse(status_code=201 if method == "POST" else 200, headers={}, data=response)

    def paths(self) -> list[str]:
        return [call.path for call in self.calls]

    def __enter__(self) -> FakeTransport:
        return self

    def __exit__(self, *exc_info: object) -> None:
        return None


@dataclass(slots=True)
class RecordingLogger:
    """Logger double capturing messages by level."""

    infos: list[str] = field(default_factory=list)
    oks: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    debug_events: list[dict[str, object]] = field(default_factory=list)

    def info(self, message: str) -> None:
        self.infos.append(message)

    def ok(self, message: str) -> None:
        self.oks.append(message)

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)

    def debug_event(self, enabled: bool, payload: Mapping[str, object]) -> None:
        if enabled:
            self.debug_events.append(dict(payload))

    def events(self) -> list[object]:
        return [payload["event"] for payload in self.debug_events]


@pytest.fixture
def github_config() -> GitHubConfig:
    """Return configuration for a fake repository and workflow run."""
    return GitHubConfig(
        api_url=API_URL,
        repository=REPOSITORY,
        token="secret-token",
        run_id="123",
        sha="deadbeef",
    )


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def api(github_config: GitHubConfig, transport: FakeTransport) -> GitHubApi:
    return GitHubApi(github_config, transport)


def http_error(status_code: int, *, body: str | None = None, response_headers: dict[str, str] | None = None) -> HttpRequestError:
    """Build a transport error as raised for a non-2xx response."""
    return HttpRequestError(
        f"Received status code {status_code}",
        diagnostics=capture_request_context(
            f"{REPO_URL}/check-runs",
            method="POST",
            headers={"Authorization": "Bearer secret-token", "Accept": "application/vnd.github+json"},
            status_code=status_code,
            response_headers=response_headers or {},
        ),
        body=body,
    )


@pytest.fixture
def make_http_error():
    return http_error
