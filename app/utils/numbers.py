from __future__ import annotations

import math
from typing import Any


def safe_number(value: Any) -> float:
    """Coerce to a finite non-negative float; anything else becomes 0."""
    if isinstance(value, bool) or value is None:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def safe_div(numerator: float, denominator: float) -> float:
    if not denominator:
        return 0.0
    return numerator / denominator


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def format_amount(value: float) -> str:
    """1000.0 -> '1000', 12.5 -> '12.50'."""
    return f"{value:.0f}" if float(value).is_integer() else f"{value:.2f}"
