# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Repository-scoped GitHub REST calls used by suite resolution and publication."""

from __future__ import annotations

from typing import Any, Final

from ..config import GitHubConfig
from ..core.models import JsonValue
from .transport import HttpResponse, Transport

USER_AGENT: Final[str] = "lintcheck"
ACCEPT_HEADER: Final[str] = "application/vnd.github+json"


class GitHubApi:
    """Authenticated helpers for the handful of endpoints lintcheck needs."""

    def __init__(self, config: GitHubConfig, transport: Transport) -> None:
        self.config = config
        self.transport = transport

    @property
    def headers(self) -> dict[str, str]:
        """Return headers sent with every request."""

        return {
            "Content-Type": "application/json",
            "Accept": ACCEPT_HEADER,
            "Authorization": f"Bearer {self.config.token}",
            "User-Agent": USER_AGENT,
        }

    def url_for(self, path: str) -> str:
        """Return the absolute URL of repository-relative ``path``."""

        return f"{self.config.repo_api_url}/{path.lstrip('/')}"

    def get_url(self, url: str) -> Any:
        """GET an absolute API ``url`` and return its JSON body."""

        return self.transport.request(url, method="GET", headers=self.headers).data

    def get(self, path: str) -> Any:
        """GET repository-relative ``path`` and return its JSON body."""

        return self.get_url(self.url_for(path))

    def post(self, path: str, body: dict[str, JsonValue]) -> HttpResponse:
        """POST ``body`` to repository-relative ``path``."""

        return self.transport.request(self.url_for(path), method="POST", headers=self.headers, body=body)

    def list_run_jobs(self, run_id: str) -> Any:
        """List the jobs of a workflow run.

        Args:
            run_id: Workflow run id.

        Returns:
            Any: Decoded ``actions/runs/{run_id}/jobs`` body with a ``jobs`` list.
        """

        return self.get(f"actions/runs/{run_id}/jobs")

    def get_workflow_run(self, run_id: str) -> Any:
        """Fetch a workflow run.

        Args:
            run_id: Workflow run id.

        Returns:
            Any: Decoded run body, carrying ``check_suite_id`` and ``head_sha`` when known.
        """

        return self.get(f"actions/runs/{run_id}")

    def get_check_run(self, check_run_id: int) -> Any:
        """Fetch a single check run.

        Args:
            check_run_id: Check run id.

        Returns:
            Any: Decoded check run body.
        """

        return self.get(f"check-runs/{check_run_id}")

    def list_suite_check_runs(self, check_suite_id: int) -> Any:
        """List the check runs of a check suite.

        Args:
            check_suite_id: Check suite id.

        Returns:
            Any: Decoded body with a ``check_runs`` list.
        """

        return self.get(f"check-suites/{check_suite_id}/check-runs")

    def list_commit_check_runs(self, sha: str) -> Any:
        """List the check runs reported against a commit.

        Args:
            sha: Commit sha.

        Returns:
            Any: Decoded body with a ``check_runs`` list.
        """

        return self.get(f"commits/{sha}/check-runs")

    def create_check_run(self, body: dict[str, JsonValue]) -> HttpResponse:
        """Create a check run.

        Args:
            body: JSON request body as built by :meth:`CheckRunRequest.to_payload`.

        Returns:
            HttpResponse: The 2xx response of ``POST check-runs``.
        """

        return self.post("check-runs", body)


__all__ = ["ACCEPT_HEADER", "GitHubApi", "USER_AGENT"]
