"""Curve sampling.

``sample_curve`` is the evaluation engine for keyframe curves. It is total:
malformed data (empty, unsorted, or duplicate positions) degrades to a
well-defined value instead of raising.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

import numpy as np

from sparklr.core.curves.easing import apply_curve
from sparklr.core.utils.math import clamp, to_f32

if TYPE_CHECKING:
    from sparklr.core.curves.models import CurvePoint, CurveTexture


def bracket(positions: Sequence[float], t: float) -> tuple[int, int]:
    """Find the keyframe indices bracketing t.

    ``left`` is the last index with ``position <= t`` (0 if none) and
    ``right`` the first index with ``position >= t`` (last index if none).
    Shared by curve and gradient sampling.

    Args:
        positions: Keyframe positions, sorted by convention.
        t: Query position.

    Returns:
        (left, right) indices. Requires a non-empty sequence.

    Example:
        >>> bracket([0.0, 0.5, 1.0], 0.25)
        (0, 1)
        >>> bracket([0.0, 0.5, 1.0], 0.5)
        (1, 1)
    """
    left = 0
    for i, position in enumerate(positions):
        if position <= t:
            left = i

    right = len(positions) - 1
    for i, position in enumerate(positions):
        if position >= t:
            right = i
            break

    return left, right


def sample_curve(points: Sequence[CurvePoint], t: float) -> float:
    """Evaluate a keyframe curve at t.

    The right keyframe's mode, easing and tension shape its incoming
    segment.

    Args:
        points: Curve keyframes.
        t: Normalized position; clamped to [0, 1].

    Returns:
        Curve value rounded to single precision. An empty curve evaluates
        to 1.0 and a single keyframe to its own value.
    """
    t = clamp(t, 0.0, 1.0)

    if not points:
        return 1.0
    if len(points) == 1:
        return to_f32(points[0].value)

    left_idx, right_idx = bracket([p.position for p in points], t)
    left = points[left_idx]
    if left_idx == right_idx:
        return to_f32(left.value)

    right = points[right_idx]
    segment_span = right.position - left.position
    if segment_span <= 0.0:
        return to_f32(left.value)

    local_t = (t - left.position) / segment_span
    curved_t = apply_curve(local_t, right.mode, right.tension, right.easing)
    return to_f32(left.value + (right.value - left.value) * curved_t)


def sample_uniform_grid(n: int) -> list[float]:
    """Generate N evenly-spaced samples in [0, 1], both ends included.

    Args:
        n: Number of samples to generate. Must be >= 2.

    Returns:
        ``[i / (n - 1) for i in range(n)]``

    Raises:
        ValueError: If n < 2.

    Example:
        >>> sample_uniform_grid(5)
        [0.0, 0.25, 0.5, 0.75, 1.0]
    """
    if n < 2:
        raise ValueError("n must be >= 2")
    return [i / (n - 1) for i in range(n)]


def sample_many(curve: CurveTexture, ts: Sequence[float]) -> np.ndarray:
    """Evaluate a curve at every position in ts.

    Returns:
        float32 array of samples, same length as ts.
    """
    return np.array([sample_curve(curve.points, t) for t in ts], dtype=np.float32)
