"""Pure editing operations on curves.

Every function returns a new ``CurveTexture`` and leaves its input
untouched. Any edit that changes the curve's shape clears its preset name,
since the result no longer matches the preset. Refused edits raise
``ValueError``.
"""

from __future__ import annotations

import logging
import math

from sparklr.core.curves.enums import CurveEasing, CurveMode
from sparklr.core.curves.models import CurvePoint, CurveTexture
from sparklr.core.models.range import Range
from sparklr.core.utils.math import clamp

logger = logging.getLogger(__name__)

MAX_POINTS = 8
MIN_POINTS = 2
DRAG_SNAP_STEP = 0.01
# Minimum gap kept between a moved point and its neighbours.
POINT_SEPARATION = 0.001


def snap_to_step(value: float, step: float = DRAG_SNAP_STEP) -> float:
    """Round value to the nearest multiple of step, halves away from zero.

    Example:
        >>> snap_to_step(0.4567)
        0.46
    """
    steps = value / step
    rounded = math.copysign(math.floor(abs(steps) + 0.5), steps)
    return round(rounded * step, 10)


def _check_index(curve: CurveTexture, index: int) -> None:
    if not 0 <= index < len(curve.points):
        raise ValueError(f"Point index {index} out of range (curve has {len(curve.points)} points)")


def _custom(curve: CurveTexture, points: list[CurvePoint]) -> CurveTexture:
    return curve.model_copy(update={"points": points, "name": None})


def _clamp_to_range(value: float, range: Range) -> float:
    low, high = min(range.min, range.max), max(range.min, range.max)
    return clamp(value, low, high)


def insert_point(curve: CurveTexture, position: float, value: float) -> CurveTexture:
    """Insert a keyframe, keeping points ordered by position.

    The new point goes before the first point whose position is greater,
    uses a DoubleCurve segment with zero tension, and has its value
    clamped into the curve's range.

    Args:
        curve: Curve to edit.
        position: Normalized position, clamped to [0, 1].
        value: Keyframe value in range units.

    Returns:
        Edited curve.

    Raises:
        ValueError: If the curve already holds MAX_POINTS points.
    """
    if len(curve.points) >= MAX_POINTS:
        raise ValueError(f"Curve already has the maximum of {MAX_POINTS} points")

    position = clamp(position, 0.0, 1.0)
    new_point = CurvePoint(
        position=position,
        value=_clamp_to_range(value, curve.range),
        mode=CurveMode.DOUBLE_CURVE,
        tension=0.0,
    )
    insert_idx = next(
        (i for i, p in enumerate(curve.points) if p.position > position),
        len(curve.points),
    )
    points = list(curve.points)
    points.insert(insert_idx, new_point)
    logger.debug("Inserted curve point at index %d (position=%.3f)", insert_idx, position)
    return _custom(curve, points)


def remove_point(curve: CurveTexture, index: int) -> CurveTexture:
    """Remove a keyframe. A curve never drops below two points.

    Raises:
        ValueError: If index is out of range or only two points remain.
    """
    _check_index(curve, index)
    if len(curve.points) <= MIN_POINTS:
        raise ValueError(f"Curve must keep at least {MIN_POINTS} points")

    points = list(curve.points)
    del points[index]
    return _custom(curve, points)


def move_point(
    curve: CurveTexture,
    index: int,
    position: float,
    value: float,
    snap: bool = False,
) -> CurveTexture:
    """Move a keyframe without letting it cross its neighbours.

    The position is kept ``POINT_SEPARATION`` away from the neighbouring
    points (the first and last points are bounded by 0 and 1), and the
    value is clamped into the curve's range.

    Args:
        curve: Curve to edit.
        index: Index of the point to move.
        position: Target normalized position.
        value: Target value in range units.
        snap: Snap position and value to DRAG_SNAP_STEP first.

    Returns:
        Edited curve.

    Raises:
        ValueError: If index is out of range.
    """
    _check_index(curve, index)
    points = list(curve.points)

    position = clamp(position, 0.0, 1.0)
    value = _clamp_to_range(value, curve.range)
    if snap:
        position = snap_to_step(position)
        value = snap_to_step(value)

    prev_pos = points[index - 1].position + POINT_SEPARATION if index > 0 else 0.0
    next_pos = points[index + 1].position - POINT_SEPARATION if index < len(points) - 1 else 1.0
    if prev_pos > next_pos:
        # Neighbours closer than two separations; pin to their midpoint.
        prev_pos = next_pos = clamp((prev_pos + next_pos) / 2.0, 0.0, 1.0)
    position = clamp(position, prev_pos, next_pos)

    points[index] = points[index].model_copy(update={"position": position, "value": value})
    return _custom(curve, points)


def clamp_tension(mode: CurveMode, tension: float) -> float:
    """Clamp a tension into the valid interval for mode.

    Example:
        >>> clamp_tension(CurveMode.STAIRS, -0.5)
        0.0
    """
    if mode.uses_steps:
        return clamp(tension, 0.0, 1.0)
    return clamp(tension, -1.0, 1.0)


def set_point_mode(curve: CurveTexture, index: int, mode: CurveMode) -> CurveTexture:
    """Change the mode of a point's incoming segment.

    The existing tension is re-clamped for the new mode.
    """
    _check_index(curve, index)
    points = list(curve.points)
    point = points[index]
    points[index] = point.model_copy(
        update={"mode": mode, "tension": clamp_tension(mode, point.tension)}
    )
    return _custom(curve, points)


def set_point_easing(curve: CurveTexture, index: int, easing: CurveEasing) -> CurveTexture:
    _check_index(curve, index)
    points = list(curve.points)
    points[index] = points[index].with_easing(easing)
    return _custom(curve, points)


def set_point_tension(curve: CurveTexture, index: int, tension: float) -> CurveTexture:
    """Set a point's tension, clamped for its mode. Hold points are unchanged."""
    _check_index(curve, index)
    point = curve.points[index]
    if point.mode == CurveMode.HOLD:
        return curve

    points = list(curve.points)
    points[index] = point.with_tension(clamp_tension(point.mode, tension))
    return _custom(curve, points)


def reset_point_tension(curve: CurveTexture, index: int) -> CurveTexture:
    _check_index(curve, index)
    points = list(curve.points)
    points[index] = points[index].with_tension(0.0)
    return _custom(curve, points)


def set_range(curve: CurveTexture, range: Range) -> CurveTexture:
    """Change the output range, clamping every point value into it."""
    points = [p.model_copy(update={"value": _clamp_to_range(p.value, range)}) for p in curve.points]
    return curve.model_copy(update={"points": points, "range": range, "name": None})


def reverse_curve(curve: CurveTexture) -> CurveTexture:
    """Mirror the curve in time.

    Positions map to ``1 - position`` and the point order is reversed.
    Interpolation fields belong to incoming segments, so they shift by one:
    the new first point gets defaults, and points 1..n take the old
    segments' fields in reverse order.

    Example:
        >>> ramp = CurveTexture(points=[
        ...     CurvePoint(position=0.0, value=0.0),
        ...     CurvePoint(position=1.0, value=1.0),
        ... ])
        >>> [p.value for p in reverse_curve(ramp).points]
        [1.0, 0.0]
    """
    segments = [(p.mode, p.easing, p.tension) for p in curve.points[1:]]
    mirrored = [
        p.model_copy(update={"position": 1.0 - p.position}) for p in reversed(curve.points)
    ]

    points: list[CurvePoint] = []
    for i, point in enumerate(mirrored):
        if i == 0:
            points.append(point.with_default_interpolation())
            continue
        mode, easing, tension = segments[len(segments) - i]
        points.append(point.model_copy(update={"mode": mode, "easing": easing, "tension": tension}))

    return _custom(curve, points)


def sort_points(curve: CurveTexture) -> CurveTexture:
    """Stable sort of points by position. Shape-preserving, keeps the name."""
    return curve.model_copy(update={"points": sorted(curve.points, key=lambda p: p.position)})
