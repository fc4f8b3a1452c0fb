"""Scalar and array helpers with the rounding and IEEE semantics the engine relies on."""

from __future__ import annotations

import math
from typing import Any, TypeAlias

import numpy as np
from numpy.typing import NDArray

FloatArray: TypeAlias = NDArray[np.float64]


def fract(value: float) -> float:
    """Fractional part with the sign of ``value``; NaN for non-finite input."""
    if math.isfinite(value):
        return math.fmod(value, 1.0)
    return math.nan


def clamp(value: float, low: float, high: float) -> float:
    """Clamp to ``[low, high]``, letting NaN through unchanged."""
    if value < low:
        return low
    if value > high:
        return high
    return value


def non_negative(value: float) -> float:
    """``max(value, 0)`` where NaN collapses to zero."""
    return value if value > 0.0 else 0.0


def divide(numerator: float, denominator: float) -> float:
    """IEEE division: zero denominators give inf or NaN instead of raising."""
    try:
        return numerator / denominator
    except ZeroDivisionError:
        with np.errstate(divide="ignore", invalid="ignore"):
            return float(np.float64(numerator) / np.float64(denominator))


def sin(value: float) -> float:
    """``math.sin`` that returns NaN for infinite input instead of raising."""
    if math.isinf(value):
        return math.nan
    return math.sin(value)


def cos(value: float) -> float:
    if math.isinf(value):
        return math.nan
    return math.cos(value)


def power(base: float, exponent: float) -> float:
    """``base ** exponent`` returning inf/NaN where ``math.pow`` would raise."""
    try:
        return math.pow(base, exponent)
    except (ValueError, OverflowError):
        with np.errstate(all="ignore"):
            return float(np.power(np.float64(base), np.float64(exponent)))


def round_half_away(value: float) -> float:
    """Round to nearest, ties away from zero."""
    if not math.isfinite(value):
        return value
    truncated = float(math.trunc(value))
    if abs(value - truncated) >= 0.5:
        return truncated + math.copysign(1.0, value)
    return truncated


def round_half_away_array(values: NDArray[Any]) -> FloatArray:
    """Vectorised ``round_half_away``; NaN stays NaN."""
    truncated = np.trunc(values)
    return np.where(np.abs(values - truncated) >= 0.5, truncated + np.sign(values), truncated)


def saturating_index(value: float, high: int) -> int:
    """Round a float to an index in ``[0, high]``; negative and NaN values map to 0."""
    rounded = round_half_away(value)
    if not rounded > 0.0:
        return 0
    if rounded > high:
        return high
    return int(rounded)


def lerp(a: float, b: float, f: float) -> float:
    return (1.0 - f) * a + f * b
