"""Keyframe curve models.

This module defines the authored curve primitives:
- CurvePoint: a keyframe plus the interpolation rule of its incoming segment
- CurveTexture: an optional preset name, ordered keyframes and an output range

All models are frozen; edits produce new instances (see ``editing``).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from sparklr.core.caching.fingerprint import CacheKeyHasher
from sparklr.core.curves.enums import CurveEasing, CurveMode
from sparklr.core.curves.sampling import sample_curve
from sparklr.core.models.range import Range
from sparklr.core.utils.math import to_f32


class CurvePoint(BaseModel):
    """A single curve keyframe.

    ``mode``, ``easing`` and ``tension`` describe the segment ending at
    this point, so they carry no meaning on the first point.

    Attributes:
        position: Normalized position, [0, 1] by convention (not clamped).
        value: Keyframe value in the curve's range units.
        mode: Shape of the incoming segment.
        easing: Easing family for curved modes.
        tension: Signed steepness in [-1, 1] for SingleCurve/DoubleCurve,
            step selector in [0, 1] for Stairs/SmoothStairs, ignored by Hold.

    Example:
        >>> point = CurvePoint(position=0.5, value=0.7)
        >>> point.mode
        <CurveMode.DOUBLE_CURVE: 'DoubleCurve'>
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    position: float = Field(..., description="Normalized position [0,1]")
    value: float = Field(..., description="Keyframe value")
    mode: CurveMode = Field(default=CurveMode.DOUBLE_CURVE)
    easing: CurveEasing = Field(default=CurveEasing.POWER)
    tension: float = Field(default=0.0)

    def with_mode(self, mode: CurveMode) -> CurvePoint:
        return self.model_copy(update={"mode": mode})

    def with_easing(self, easing: CurveEasing) -> CurvePoint:
        return self.model_copy(update={"easing": easing})

    def with_tension(self, tension: float) -> CurvePoint:
        return self.model_copy(update={"tension": tension})

    def with_default_interpolation(self) -> CurvePoint:
        """Copy with mode, easing and tension reset to defaults."""
        return self.model_copy(
            update={
                "mode": CurveMode.DOUBLE_CURVE,
                "easing": CurveEasing.POWER,
                "tension": 0.0,
            }
        )


def _default_points() -> list[CurvePoint]:
    return [CurvePoint(position=0.0, value=1.0), CurvePoint(position=1.0, value=1.0)]


class CurveTexture(BaseModel):
    """A keyframe curve evaluated over normalized particle lifetime.

    Points are sorted by position by convention; the type does not enforce
    it and sampling tolerates unsorted data.

    Attributes:
        name: Preset name, or None once the curve has been hand-edited.
        points: Keyframes.
        range: Output range of the curve values.

    Example:
        >>> CurveTexture().sample(0.3)
        1.0
        >>> CurveTexture().is_constant()
        True
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str | None = Field(default=None, description="Preset name, None when custom")
    points: list[CurvePoint] = Field(default_factory=_default_points)
    range: Range = Field(default_factory=Range)

    def sample(self, t: float) -> float:
        """Evaluate the curve at normalized position t (clamped to [0, 1])."""
        return sample_curve(self.points, t)

    def sample_normalized(self, t: float) -> float:
        """Evaluate the curve and map the result into [0, 1] through ``range``."""
        return (self.sample(t) - self.range.min) / self.range.span()

    def is_constant(self) -> bool:
        """True when every keyframe has the same value."""
        if not self.points:
            return True
        first = self.points[0].value
        return all(p.value == first for p in self.points[1:])

    def cache_key(self) -> int:
        """Stable 64-bit key over everything that affects sampling output."""
        hasher = CacheKeyHasher()
        for point in self.points:
            hasher.write_f32(point.position)
            hasher.write_f32(to_f32(point.value))
            hasher.write_u8(point.mode.discriminant)
            hasher.write_u8(point.easing.discriminant)
            hasher.write_f64(point.tension)
        hasher.write_f32(self.range.min)
        hasher.write_f32(self.range.max)
        return hasher.finish()

    def with_name(self, name: str | None) -> CurveTexture:
        return self.model_copy(update={"name": name})

    def with_range(self, range: Range) -> CurveTexture:
        return self.model_copy(update={"range": range})

    def with_points(self, points: list[CurvePoint]) -> CurveTexture:
        return self.model_copy(update={"points": points})
