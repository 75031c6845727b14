"""Gradient sampling.

``sample_gradient`` never raises: empty gradients evaluate to opaque white
and degenerate segments return the left stop's colour.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from sparklr.core.curves.sampling import bracket
from sparklr.core.gradients.enums import GradientInterpolation
from sparklr.core.utils.math import clamp, lerp, smoothstep, to_f32

if TYPE_CHECKING:
    from sparklr.core.gradients.models import Color, GradientStop

_OPAQUE_WHITE = (1.0, 1.0, 1.0, 1.0)


def lerp_color(a: Sequence[float], b: Sequence[float], t: float) -> Color:
    """Component-wise linear interpolation of two RGBA colours."""
    return (
        to_f32(lerp(a[0], b[0], t)),
        to_f32(lerp(a[1], b[1], t)),
        to_f32(lerp(a[2], b[2], t)),
        to_f32(lerp(a[3], b[3], t)),
    )


def _as_color(color: Sequence[float]) -> Color:
    return (to_f32(color[0]), to_f32(color[1]), to_f32(color[2]), to_f32(color[3]))


def sample_gradient(
    stops: Sequence[GradientStop],
    interpolation: GradientInterpolation,
    position: float,
) -> Color:
    """Evaluate a gradient at a normalized position.

    Args:
        stops: Gradient stops, sorted by position by convention.
        interpolation: Blend mode between the bracketing stops.
        position: Normalized position; clamped to [0, 1].

    Returns:
        Linear RGBA colour.
    """
    t = clamp(position, 0.0, 1.0)

    if not stops:
        return _OPAQUE_WHITE
    if len(stops) == 1:
        return _as_color(stops[0].color)

    left_idx, right_idx = bracket([s.position for s in stops], t)
    left = stops[left_idx]
    right = stops[right_idx]

    segment_span = right.position - left.position
    if left_idx == right_idx or segment_span <= 0.0:
        return _as_color(left.color)

    local_t = (t - left.position) / segment_span

    if interpolation == GradientInterpolation.STEPS:
        return _as_color(left.color)
    if interpolation == GradientInterpolation.SMOOTHSTEP:
        local_t = smoothstep(local_t)
    return lerp_color(left.color, right.color, local_t)
