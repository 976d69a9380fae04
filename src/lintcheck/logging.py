# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing logging helpers with optional colour and emoji support."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Final

from rich.text import Text

from lintcheck.runtime.console import detect_tty, get_console_manager

SUITE_DEBUG_PREFIX: Final[str] = "[check-suite-debug]"


def emoji(symbol: str, enable: bool) -> str:
    """Return ``symbol`` when emoji output is enabled, otherwise blank."""

    return symbol if enable else ""


def _print_line(
    msg: str,
    *,
    style: str | None,
    use_emoji: bool,
    use_color: bool | None = None,
) -> None:
    color_enabled = detect_tty() if use_color is None else use_color
    console = get_console_manager().get(color=color_enabled, emoji=use_emoji)
    text = Text(msg)
    if style and color_enabled:
        text.stylize(style)
    console.print(text)


def info(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit an informational message."""

    prefix = emoji("ℹ️ ", use_emoji)
    _print_line(f"{prefix}{msg}", style="cyan", use_emoji=use_emoji, use_color=use_color)


def ok(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit a success message."""

    prefix = emoji("✅ ", use_emoji)
    _print_line(f"{prefix}{msg}", style="green", use_emoji=use_emoji, use_color=use_color)


def warn(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit a warning message."""

    prefix = emoji("⚠️ ", use_emoji)
    _print_line(f"{prefix}{msg}", style="yellow", use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit an error message."""

    prefix = emoji("❌ ", use_emoji)
    _print_line(f"{prefix}{msg}", style="red", use_emoji=use_emoji, use_color=use_color)


def format_suite_debug(payload: Mapping[str, object]) -> str:
    """Return the single-line representation of a check suite debug event.

    Args:
        payload: Structured event carrying an ``event`` discriminator.

    Returns:
        str: Prefixed line holding the payload serialised as compact JSON.
    """

    return f"{SUITE_DEBUG_PREFIX} {json.dumps(dict(payload), default=str)}"


@dataclass(slots=True)
class ActionLogger:
    """Route action log output through the shared console helpers.

    When ``workflow_commands`` is enabled, warnings and errors are written as
    GitHub Actions workflow commands instead of styled console lines so they
    surface in the run UI.
    """

    use_emoji: bool = False
    workflow_commands: bool = False

    def info(self, message: str) -> None:
        """Log an informational message."""

        info(message, use_emoji=self.use_emoji)

    def ok(self, message: str) -> None:
        """Log a success message."""

        ok(message, use_emoji=self.use_emoji)

    def warn(self, message: str) -> None:
        """Log a warning message."""

        if self.workflow_commands:
            _print_line(f"::warning::{message}", style=None, use_emoji=False, use_color=False)
            return
        warn(message, use_emoji=self.use_emoji)

    def error(self, message: str) -> None:
        """Log an error message."""

        if self.workflow_commands:
            _print_line(f"::error::{message}", style=None, use_emoji=False, use_color=False)
            return
        fail(message, use_emoji=self.use_emoji)

    def debug_event(self, enabled: bool, payload: Mapping[str, object]) -> None:
        """Emit a structured check suite debug line when ``enabled`` is true.

        Args:
            enabled: Whether check suite debugging was requested.
            payload: Structured event carrying an ``event`` discriminator.
        """

        if not enabled:
            return
        _print_line(format_suite_debug(payload), style=None, use_emoji=False, use_color=False)


__all__ = [
    "ActionLogger",
    "SUITE_DEBUG_PREFIX",
    "emoji",
    "fail",
    "format_suite_debug",
    "info",
    "ok",
    "warn",
]
