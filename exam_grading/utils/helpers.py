"""
Utility functions for score arithmetic
"""
import math
from typing import Optional


def round_half_up(value: float, digits: int = 1) -> float:
    """Round to a number of decimals, halves away from zero for positives"""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    """Clamp value into [low, high]"""
    return max(low, min(high, value))


def calculate_percentage(score: float, total: float) -> float:
    """Percentage of score over total with one decimal, 0 when total is 0"""
    if total <= 0:
        return 0.0
    return round_half_up(score / total * 100, 1)


def percent(ratio: Optional[float]) -> int:
    """Ratio as a whole-number percentage for feedback text"""
    if ratio is None:
        return 0
    return int(round_half_up(ratio * 100, 0))
