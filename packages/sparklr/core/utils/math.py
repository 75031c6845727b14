"""Math utilities for common operations."""

from __future__ import annotations

from typing import TypeVar

import numpy as np

Number = TypeVar("Number", int, float, np.number)

# Machine epsilon of an IEEE single-precision float.
F32_EPSILON: float = float(np.finfo(np.float32).eps)


def clamp(value: Number, min_val: Number, max_val: Number) -> Number:
    """Clamp value to range [min_val, max_val].

    Args:
        value: Value to clamp
        min_val: Minimum allowed value
        max_val: Maximum allowed value

    Returns:
        Clamped value
    """
    return max(min_val, min(max_val, value))


def lerp(a: Number, b: Number, t: float) -> float:
    """Linear interpolation between a and b.

    Args:
        a: Start value
        b: End value
        t: Interpolation factor [0, 1]

    Returns:
        Interpolated value
    """
    return float(a) + (float(b) - float(a)) * t


def smoothstep(t: float) -> float:
    """Cubic Hermite ease, 3t^2 - 2t^3. Expects t in [0, 1]."""
    return t * t * (3.0 - 2.0 * t)


def to_f32(value: float) -> float:
    """Round a Python float to the nearest single-precision value."""
    return float(np.float32(value))
