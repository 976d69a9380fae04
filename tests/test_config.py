# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests covering environment configuration loading."""

from __future__ import annotations

import pytest

from lintcheck.config import DEFAULT_API_URL, ConfigError, load_config


def test_defaults_from_empty_environment() -> None:
    config = load_config({})

    assert config.github.api_url == DEFAULT_API_URL
    assert config.github.run_id is None
    assert config.check_suite.resolver == "job-check-run"
    assert config.check_suite.job_check_run_id is None
    assert config.check_suite.retries == 3
    assert config.check_suite.delay_ms == 2000
    assert config.check_suite.debug is False
    assert config.publish.neutral_check_on_warning is False


def test_reads_actions_variables_and_inputs() -> None:
    config = load_config(
        {
            "GITHUB_API_URL": "https://ghe.example/api/v3/",
            "GITHUB_REPOSITORY": "octo/repo",
            "GITHUB_RUN_ID": "123",
            "GITHUB_SHA": "deadbeef",
            "GITHUB_ACTIONS": "true",
            "INPUT_GITHUB_TOKEN": "tok",
            "INPUT_CHECK_SUITE_RESOLVER": "heuristic",
            "INPUT_CHECK_SUITE_JOB_CHECK_RUN_ID": "555",
            "INPUT_CHECK_SUITE_DEBUG": "true",
            "INPUT_CHECK_SUITE_MODE": "none",
            "INPUT_CHECK_SUITE_JOB_NAME": "lint",
            "INPUT_CHECK_SUITE_RETRIES": "5",
            "INPUT_CHECK_SUITE_DELAY_MS": "0",
            "INPUT_NEUTRAL_CHECK_ON_WARNING": "yes",
        }
    )

    assert config.github.repo_api_url == "https://ghe.example/api/v3/repos/octo/repo"
    assert config.github.token == "tok"
    assert config.github.in_actions is True
    assert (config.github.run_id, config.github.sha) == ("123", "deadbeef")
    suite = config.check_suite
    assert suite.resolver == "heuristic"
    assert suite.job_check_run_id == 555
    assert suite.debug is True
    assert suite.mode == "none"
    assert suite.job_name_hint == "lint"
    assert (suite.retries, suite.delay_ms) == (5, 0)
    assert config.publish.neutral_check_on_warning is True


def test_blank_inputs_are_treated_as_unset() -> None:
    config = load_config({"INPUT_CHECK_SUITE_JOB_CHECK_RUN_ID": "  ", "INPUT_CHECK_SUITE_DEBUG": ""})

    assert config.check_suite.job_check_run_id is None
    assert config.check_suite.debug is False


@pytest.mark.parametrize("raw", ["abc", "12.5", "${{ job.check_run_id }}"])
def test_malformed_job_check_run_id_is_treated_as_unset(raw: str) -> None:
    config = load_config({"INPUT_CHECK_SUITE_JOB_CHECK_RUN_ID": raw})

    assert config.check_suite.job_check_run_id is None


def test_token_is_hidden_from_repr() -> None:
    config = load_config({"INPUT_GITHUB_TOKEN": "super-secret"})

    assert "super-secret" not in repr(config)


@pytest.mark.parametrize(
    "environ",
    [
        {"INPUT_CHECK_SUITE_DEBUG": "maybe"},
        {"INPUT_CHECK_SUITE_RETRIES": "0"},
        {"INPUT_CHECK_SUITE_DELAY_MS": "-1"},
        {"INPUT_CHECK_SUITE_MODE": "sometimes"},
        {"INPUT_CHECK_SUITE_RESOLVER": "guess"},
    ],
)
def test_invalid_inputs_raise_config_error(environ: dict[str, str]) -> None:
    with pytest.raises(ConfigError):
        load_config(environ)
