from __future__ import annotations

import math

NEUTRAL = 50.0


def clamp(x: float, lo: float, hi: float) -> float:
    return min(hi, max(lo, x))


def normalize_lower_better(x: float, lo: float, hi: float) -> float:
    """Map x onto 0..100 where lo scores 100 and hi scores 0."""
    if hi <= lo:
        return NEUTRAL
    nx = clamp(x, lo, hi)
    return ((hi - nx) / (hi - lo)) * 100


def normalize_higher_better(x: float, lo: float, hi: float) -> float:
    """Map x onto 0..100 where lo scores 0 and hi scores 100."""
    if hi <= lo:
        return NEUTRAL
    nx = clamp(x, lo, hi)
    return ((nx - lo) / (hi - lo)) * 100


def round_half_away(x: float) -> int:
    # round() in Python is banker's rounding; scores use 0.5 -> 1
    return int(math.copysign(math.floor(abs(x) + 0.5), x))
