"""Formatting helpers for displaying cultivator progress."""

from __future__ import annotations

from typing import SupportsFloat, SupportsInt


def format_qi(value: SupportsFloat) -> str:
    """Return ``value`` rounded to two decimals for display."""

    return f"{float(value):.2f}"


def format_number(value: SupportsInt) -> str:
    """Return ``value`` with ``'`` as the thousands separator."""

    integer = int(value)
    sign = "-" if integer < 0 else ""
    formatted = f"{abs(integer):,}".replace(",", "'")
    return f"{sign}{formatted}"


__all__ = ["format_number", "format_qi"]
