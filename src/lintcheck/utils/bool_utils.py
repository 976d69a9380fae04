# SPDX-License-Identifier: MIT
"""Boolean parsing helpers for action inputs and environment variables."""

from __future__ import annotations

from typing import Final

TRUTHY_LITERALS: Final[set[str]] = {"1", "true", "yes", "on"}
FALSY_LITERALS: Final[set[str]] = {"0", "false", "no", "off"}


def coerce_bool_literal(value: str) -> bool:
    """Return the boolean represented by ``value`` or raise ``ValueError``.

    Args:
        value: Raw string containing a boolean literal such as an action input.

    Returns:
        bool: ``True`` for truthy literals, ``False`` for falsy literals.

    Raises:
        ValueError: If ``value`` does not match a known boolean literal.
    """

    normalized = value.strip().lower()
    if normalized in TRUTHY_LITERALS:
        return True
    if normalized in FALSY_LITERALS:
        return False
    raise ValueError(f"Unsupported boolean literal: {value!r}")


__all__ = ["coerce_bool_literal"]
