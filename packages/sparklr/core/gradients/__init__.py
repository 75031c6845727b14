"""Colour gradients: models, evaluation and editing."""

from sparklr.core.gradients.enums import GradientInterpolation
from sparklr.core.gradients.models import (
    BLACK,
    WHITE,
    Color,
    Gradient,
    GradientColor,
    GradientStop,
    SolidColor,
    SolidOrGradientColor,
)
from sparklr.core.gradients.sampling import lerp_color, sample_gradient

__all__ = [
    "BLACK",
    "WHITE",
    "Color",
    "Gradient",
    "GradientColor",
    "GradientInterpolation",
    "GradientStop",
    "SolidColor",
    "SolidOrGradientColor",
    "lerp_color",
    "sample_gradient",
]
