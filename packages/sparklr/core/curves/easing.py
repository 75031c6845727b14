"""Segment shaping: tension, easing families, and step quantization.

All functions operate on a segment-local ``t`` in [0, 1] and return a
shaped ``t`` in [0, 1]. They are pure and never raise.

Tension contract (every easing family):
- ``|tension| < eps`` is linear.
- Positive tension eases in (slow start, fast finish).
- Negative tension eases out; it is the mirror image of the same
  positive tension: ``apply_tension(t, -k) == 1 - apply_tension(1 - t, k)``.
- Magnitude selects steepness.
"""

from __future__ import annotations

import math
from typing import Any

from easing_functions import CircularEaseIn, ExponentialEaseIn, SineEaseIn

from sparklr.core.curves.enums import CurveEasing, CurveMode
from sparklr.core.utils.math import F32_EPSILON, clamp, lerp, smoothstep

MAX_STEPS = 64

# Caps the Power exponent at 1000 as |tension| -> 1.
_POWER_SINGULARITY = 0.999

_EASING_DEFAULTS: dict[str, float] = {
    "start": 0.0,
    "end": 1.0,
    "duration": 1.0,
}

# Full-strength ease-in curve of each non-Power family.
_FULL_EASE_IN: dict[CurveEasing, Any] = {
    CurveEasing.SINE: SineEaseIn(**_EASING_DEFAULTS),
    CurveEasing.EXPO: ExponentialEaseIn(**_EASING_DEFAULTS),
    CurveEasing.CIRC: CircularEaseIn(**_EASING_DEFAULTS),
}


def _power_ease_in(t: float, strength: float) -> float:
    exponent = 1.0 / (1.0 - strength * _POWER_SINGULARITY)
    return max(t, 0.0) ** exponent


def _ease_in(t: float, strength: float, easing: CurveEasing) -> float:
    if easing == CurveEasing.POWER:
        return _power_ease_in(t, strength)
    full = float(_FULL_EASE_IN[easing].ease(clamp(t, 0.0, 1.0)))
    return t + (full - t) * strength


def apply_tension(t: float, tension: float, easing: CurveEasing = CurveEasing.POWER) -> float:
    """Shape a segment-local t with a signed tension.

    For the Power family the exponent is ``1 / (1 - |tension| * 0.999)``:
    positive tension returns ``t ** exponent``, negative returns
    ``1 - (1 - t) ** exponent``. The other families blend linearly between
    ``t`` and their full-strength ease-in curve (easing-functions) by
    ``|tension|``.

    Args:
        t: Segment-local position in [0, 1].
        tension: Signed tension, nominally in [-1, 1]. Magnitudes above 1
            are treated as 1.
        easing: Easing family.

    Returns:
        Shaped position in [0, 1].

    Example:
        >>> apply_tension(0.5, 0.0)
        0.5
        >>> round(apply_tension(0.5, 0.5), 4)
        0.2504
    """
    if abs(tension) < F32_EPSILON:
        return t
    strength = min(abs(tension), 1.0)
    if tension > 0.0:
        return _ease_in(t, strength, easing)
    return 1.0 - _ease_in(1.0 - t, strength, easing)


def tension_to_steps(tension: float) -> int:
    """Map a [0, 1] tension to a step count in [1, 64].

    Example:
        >>> tension_to_steps(0.0), tension_to_steps(1.0)
        (1, 64)
    """
    # Half rounds up, not to even.
    return 1 + math.floor((MAX_STEPS - 1) * clamp(tension, 0.0, 1.0) + 0.5)


def _stairs(t: float, steps: int, smooth: bool) -> float:
    scaled = t * steps
    step = min(math.floor(scaled), steps - 1)
    last = max(steps - 1, 1)
    level = step / last
    if not smooth:
        return level
    # Same levels as Stairs; each step eases toward the next one.
    next_level = min(step + 1, steps - 1) / last
    return lerp(level, next_level, smoothstep(scaled - step))


def apply_curve(
    t: float,
    mode: CurveMode,
    tension: float,
    easing: CurveEasing = CurveEasing.POWER,
) -> float:
    """Shape a segment-local t according to the segment's mode.

    Args:
        t: Segment-local position in [0, 1].
        mode: Interpolation mode of the segment.
        tension: Mode-specific tension (signed steepness, or step count).
        easing: Easing family for curved modes.

    Returns:
        Shaped position. Hold always returns 0.0 so the segment keeps the
        left keyframe's value.
    """
    if mode == CurveMode.SINGLE_CURVE:
        return apply_tension(t, tension, easing)
    if mode == CurveMode.DOUBLE_CURVE:
        if t < 0.5:
            return apply_tension(t * 2.0, tension, easing) * 0.5
        return 0.5 + apply_tension((t - 0.5) * 2.0, -tension, easing) * 0.5
    if mode == CurveMode.HOLD:
        return 0.0
    if mode == CurveMode.STAIRS:
        return _stairs(t, tension_to_steps(tension), smooth=False)
    return _stairs(t, tension_to_steps(tension), smooth=True)
