"""Colour gradient models.

- GradientStop: a linear RGBA colour at a normalized position
- Gradient: ordered stops plus an interpolation mode
- SolidColor / GradientColor: the two shapes of a colour parameter that is
  either constant or varies over lifetime (``SolidOrGradientColor``)
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from sparklr.core.caching.fingerprint import CacheKeyHasher
from sparklr.core.gradients.enums import GradientInterpolation
from sparklr.core.gradients.sampling import sample_gradient

Color = tuple[float, float, float, float]

WHITE: Color = (1.0, 1.0, 1.0, 1.0)
BLACK: Color = (0.0, 0.0, 0.0, 1.0)


class GradientStop(BaseModel):
    """A colour at a normalized position.

    Attributes:
        color: Linear RGBA.
        position: Normalized position, [0, 1] by convention.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    color: Color = Field(default=WHITE, description="Linear RGBA")
    position: float = Field(default=0.0, description="Normalized position [0,1]")


def _default_stops() -> list[GradientStop]:
    return [GradientStop(color=BLACK, position=0.0), GradientStop(color=WHITE, position=1.0)]


class Gradient(BaseModel):
    """A colour ramp over normalized time.

    Defaults to opaque black at 0 blending linearly to opaque white at 1.

    Example:
        >>> Gradient().sample(0.5)
        (0.5, 0.5, 0.5, 1.0)
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    stops: list[GradientStop] = Field(default_factory=_default_stops)
    interpolation: GradientInterpolation = Field(default=GradientInterpolation.LINEAR)

    @classmethod
    def white(cls) -> Gradient:
        """Constant opaque white."""
        return cls(
            stops=[GradientStop(color=WHITE, position=0.0), GradientStop(color=WHITE, position=1.0)]
        )

    def sample(self, position: float) -> Color:
        return sample_gradient(self.stops, self.interpolation, position)

    def cache_key(self) -> int:
        hasher = CacheKeyHasher()
        for stop in self.stops:
            hasher.write_f32s(stop.color)
            hasher.write_f32(stop.position)
        hasher.write_u8(self.interpolation.discriminant)
        return hasher.finish()


class SolidColor(BaseModel):
    """A colour parameter that does not vary."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["Solid"] = "Solid"
    color: Color = Field(default=WHITE, description="Linear RGBA")

    def is_solid(self) -> bool:
        return True

    def is_gradient(self) -> bool:
        return False

    def as_solid_color(self) -> Color | None:
        return self.color


class GradientColor(BaseModel):
    """A colour parameter sampled from a gradient."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["Gradient"] = "Gradient"
    gradient: Gradient = Field(default_factory=Gradient)

    def is_solid(self) -> bool:
        return False

    def is_gradient(self) -> bool:
        return True

    def as_solid_color(self) -> Color | None:
        return None


SolidOrGradientColor = Annotated[SolidColor | GradientColor, Field(discriminator="kind")]
