"""Keyframe curves: models, evaluation, editing and presets."""

from sparklr.core.curves.easing import apply_curve, apply_tension, tension_to_steps
from sparklr.core.curves.enums import CurveEasing, CurveMode
from sparklr.core.curves.models import CurvePoint, CurveTexture
from sparklr.core.curves.presets import CURVE_PRESETS, CurvePreset, get_preset
from sparklr.core.curves.sampling import sample_curve

__all__ = [
    "CURVE_PRESETS",
    "CurveEasing",
    "CurveMode",
    "CurvePoint",
    "CurvePreset",
    "CurveTexture",
    "apply_curve",
    "apply_tension",
    "get_preset",
    "sample_curve",
    "tension_to_steps",
]
