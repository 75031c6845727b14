"""Gradient interpolation enum."""

from __future__ import annotations

from enum import Enum


class GradientInterpolation(str, Enum):
    """How colours blend between two stops."""

    STEPS = "Steps"
    LINEAR = "Linear"
    SMOOTHSTEP = "Smoothstep"

    @property
    def discriminant(self) -> int:
        return list(GradientInterpolation).index(self)
