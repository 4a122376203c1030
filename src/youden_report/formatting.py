"""Shared numeric formatting helpers for Youden report outputs.

Report tables and legends use these helpers so that printed values follow
the same conventions (four significant decimals for errors, compact
percentages for confidence levels).
"""

from __future__ import annotations

from typing import Optional


def round4(value: float) -> float:
    """Return ``value`` rounded to four decimal places."""

    return round(value, 4)


def format_error(value: Optional[float]) -> str:
    """Return a four-decimal string for an error value, or empty.

    Parameters
    ----------
    value:
        Error distance or ``None``.

    Returns
    -------
    str
        ``value`` formatted to four decimal places when it is not ``None``;
        otherwise an empty string.
    """

    if value is None:
        return ""
    return f"{round4(float(value)):.4f}"


def format_percent(value: float) -> str:
    """Return a percentage without trailing zeros, e.g. ``95`` or ``97.5``."""

    return f"{float(value):g}"


def format_flag(value: object) -> str:
    """Return ``"yes"`` or ``"no"`` for a truthy or falsy category flag."""

    return "yes" if bool(value) else "no"


__all__ = ["round4", "format_error", "format_percent", "format_flag"]
