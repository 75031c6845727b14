"""Pure editing operations on gradients.

Every function returns a new ``Gradient``. Refused edits raise
``ValueError``.
"""

from __future__ import annotations

from sparklr.core.gradients.models import WHITE, Color, Gradient, GradientStop
from sparklr.core.gradients.sampling import lerp_color
from sparklr.core.utils.math import clamp

MAX_STOPS = 8
MIN_STOPS = 1
STOP_SEPARATION = 0.001


def _check_index(gradient: Gradient, index: int) -> None:
    if not 0 <= index < len(gradient.stops):
        raise ValueError(
            f"Stop index {index} out of range (gradient has {len(gradient.stops)} stops)"
        )


def _check_capacity(gradient: Gradient) -> None:
    if len(gradient.stops) >= MAX_STOPS:
        raise ValueError(f"Gradient already has the maximum of {MAX_STOPS} stops")


def _insert_sorted(gradient: Gradient, stop: GradientStop) -> Gradient:
    insert_idx = next(
        (i for i, s in enumerate(gradient.stops) if s.position > stop.position),
        len(gradient.stops),
    )
    stops = list(gradient.stops)
    stops.insert(insert_idx, stop)
    return gradient.model_copy(update={"stops": stops})


def add_stop(gradient: Gradient) -> Gradient:
    """Append a stop derived from the existing ones.

    - No stops: opaque white at 0.
    - One stop: same colour at the opposite end (1.0 if the stop sits
      below 0.5, else 0.0).
    - Otherwise: halfway between the last two stops, with their average
      colour.

    Raises:
        ValueError: If the gradient already holds MAX_STOPS stops.
    """
    _check_capacity(gradient)
    stops = gradient.stops

    if not stops:
        new_stop = GradientStop(color=WHITE, position=0.0)
    elif len(stops) == 1:
        existing = stops[0]
        new_stop = GradientStop(
            color=existing.color,
            position=1.0 if existing.position < 0.5 else 0.0,
        )
    else:
        second_last, last = stops[-2], stops[-1]
        new_stop = GradientStop(
            color=lerp_color(second_last.color, last.color, 0.5),
            position=(second_last.position + last.position) / 2.0,
        )

    return _insert_sorted(gradient, new_stop)


def insert_stop(gradient: Gradient, position: float) -> Gradient:
    """Insert a stop at position, coloured halfway between its neighbours.

    Neighbours are the last stop at or before position and the first stop
    at or after it; a missing neighbour counts as opaque white.

    Raises:
        ValueError: If the gradient already holds MAX_STOPS stops.
    """
    _check_capacity(gradient)
    position = clamp(position, 0.0, 1.0)

    left_color: Color = next(
        (s.color for s in reversed(gradient.stops) if s.position <= position), WHITE
    )
    right_color: Color = next((s.color for s in gradient.stops if s.position >= position), WHITE)

    new_stop = GradientStop(color=lerp_color(left_color, right_color, 0.5), position=position)
    return _insert_sorted(gradient, new_stop)


def remove_stop(gradient: Gradient, index: int) -> Gradient:
    """Remove a stop. A gradient always keeps at least one stop.

    Raises:
        ValueError: If index is out of range or only one stop remains.
    """
    _check_index(gradient, index)
    if len(gradient.stops) <= MIN_STOPS:
        raise ValueError("Gradient must keep at least one stop")

    stops = list(gradient.stops)
    del stops[index]
    return gradient.model_copy(update={"stops": stops})


def move_stop(gradient: Gradient, index: int, position: float) -> Gradient:
    """Drag a stop without letting it cross its neighbours."""
    _check_index(gradient, index)
    stops = list(gradient.stops)

    prev_pos = stops[index - 1].position + STOP_SEPARATION if index > 0 else 0.0
    next_pos = stops[index + 1].position - STOP_SEPARATION if index < len(stops) - 1 else 1.0
    if prev_pos > next_pos:
        # Neighbours closer than two separations; pin to their midpoint.
        prev_pos = next_pos = clamp((prev_pos + next_pos) / 2.0, 0.0, 1.0)
    stops[index] = stops[index].model_copy(update={"position": clamp(position, prev_pos, next_pos)})
    return gradient.model_copy(update={"stops": stops})


def set_stop_position(gradient: Gradient, index: int, position: float) -> Gradient:
    """Set a stop's position (clamped to [0, 1]) and re-sort the stops.

    Unlike ``move_stop`` the stop may jump past its neighbours.
    """
    _check_index(gradient, index)
    stops = list(gradient.stops)
    stops[index] = stops[index].model_copy(update={"position": clamp(position, 0.0, 1.0)})
    stops.sort(key=lambda s: s.position)
    return gradient.model_copy(update={"stops": stops})


def set_stop_color(gradient: Gradient, index: int, color: Color) -> Gradient:
    """Recolour one stop.

    Raises:
        ValueError: If index is out of range.
        pydantic.ValidationError: If color is not four numbers.
    """
    _check_index(gradient, index)
    stops = list(gradient.stops)
    stops[index] = GradientStop(color=color, position=stops[index].position)
    return gradient.model_copy(update={"stops": stops})


def redistribute_stops(gradient: Gradient) -> Gradient:
    """Space stops evenly over [0, 1], keeping their order.

    Gradients with fewer than two stops are returned unchanged.
    """
    count = len(gradient.stops)
    if count < 2:
        return gradient

    stops = [
        stop.model_copy(update={"position": i / (count - 1)})
        for i, stop in enumerate(gradient.stops)
    ]
    return gradient.model_copy(update={"stops": stops})
