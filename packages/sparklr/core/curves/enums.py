"""Curve interpolation enums."""

from __future__ import annotations

from enum import Enum


class CurveMode(str, Enum):
    """Shape of the segment ending at a keyframe."""

    SINGLE_CURVE = "SingleCurve"
    DOUBLE_CURVE = "DoubleCurve"
    HOLD = "Hold"
    STAIRS = "Stairs"
    SMOOTH_STAIRS = "SmoothStairs"

    @property
    def discriminant(self) -> int:
        return _MODE_ORDER.index(self)

    @property
    def uses_steps(self) -> bool:
        """True for modes whose tension selects a step count."""
        return self in (CurveMode.STAIRS, CurveMode.SMOOTH_STAIRS)


class CurveEasing(str, Enum):
    """Easing family used to shape curved segments."""

    POWER = "Power"
    SINE = "Sine"
    EXPO = "Expo"
    CIRC = "Circ"

    @property
    def discriminant(self) -> int:
        return _EASING_ORDER.index(self)


_MODE_ORDER = list(CurveMode)
_EASING_ORDER = list(CurveEasing)
