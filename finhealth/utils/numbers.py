"""
Numeric helpers shared by the calculators and the report formatters.

Rounding: scores and allocation percentages use ``round_half_up`` (2.5 → 3)
rather than Python's banker's rounding, so a 15% stock allocation estimates
5% international, not 4%.
"""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity."""
    return int(math.floor(value + 0.5))


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def clamp_score(value: float) -> int:
    """Round and clamp a raw score into [0, 100]."""
    return int(clamp(round_half_up(value), 0, 100))


def format_currency(value: float) -> str:
    """Format whole dollars: ``1234.6`` → ``"$1,235"``, ``-50`` → ``"-$50"``."""
    amount = round_half_up(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,}"


def format_compact(value: float) -> str:
    """Abbreviate large dollar amounts: ``2_400_000`` → ``"2.4M"``, ``27_000`` → ``"27K"``."""
    if value >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if value >= 1_000:
        return f"{value / 1_000:.0f}K"
    return str(round_half_up(value))


def format_percent(value: float, digits: int = 2) -> str:
    """Format a value already in percent units: ``0.75`` → ``"0.75%"``."""
    return f"{value:.{digits}f}%"
