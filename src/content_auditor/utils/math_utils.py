# src/content_auditor/utils/math_utils.py
import math


def round_half_up(value: float, digits: int = 0) -> float:
    """
    Rounds halves away from zero for non-negative values (browser Math.round),
    unlike the built-in round() which rounds halves to even.
    """
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def round_int(value: float) -> int:
    return int(round_half_up(value))


def percentage(part: int, whole: int, empty: int = 0) -> int:
    """Whole-number percentage of part/whole, `empty` when whole is zero."""
    if whole <= 0:
        return empty
    return round_int(part / whole * 100)


def clamp(value, lower, upper):
    return max(lower, min(upper, value))
