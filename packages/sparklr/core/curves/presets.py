"""Named curve presets."""

from __future__ import annotations

from dataclasses import dataclass

from sparklr.core.curves.enums import CurveEasing, CurveMode
from sparklr.core.curves.models import CurvePoint, CurveTexture
from sparklr.core.models.range import Range


def power_tension(exponent: float) -> float:
    """Tension whose Power easing equals ``t ** exponent``.

    Inverse of ``exponent = 1 / (1 - tension * 0.999)``.

    Example:
        >>> round(power_tension(2.0), 10)
        0.5005005005
    """
    return (1.0 - 1.0 / exponent) / 0.999


QUAD_TENSION = power_tension(2.0)
CUBIC_TENSION = power_tension(3.0)
QUART_TENSION = power_tension(4.0)
QUINT_TENSION = power_tension(5.0)


@dataclass(frozen=True)
class CurvePreset:
    """A named two-point curve shape."""

    name: str
    mode: CurveMode
    easing: CurveEasing
    tension: float
    start_value: float = 0.0

    def to_curve(self, range: Range | None = None) -> CurveTexture:
        """Build the preset curve: (0, start_value) to (1, 1.0)."""
        return CurveTexture(
            name=self.name,
            points=[
                CurvePoint(position=0.0, value=self.start_value),
                CurvePoint(
                    position=1.0,
                    value=1.0,
                    mode=self.mode,
                    easing=self.easing,
                    tension=self.tension,
                ),
            ],
            range=range if range is not None else Range(),
        )


def _family(label: str, easing: CurveEasing, tension: float) -> list[CurvePreset]:
    return [
        CurvePreset(f"{label} in", CurveMode.SINGLE_CURVE, easing, tension),
        CurvePreset(f"{label} out", CurveMode.SINGLE_CURVE, easing, -tension),
        CurvePreset(f"{label} in out", CurveMode.DOUBLE_CURVE, easing, tension),
    ]


CURVE_PRESETS: tuple[CurvePreset, ...] = (
    CurvePreset("Constant", CurveMode.DOUBLE_CURVE, CurveEasing.POWER, 0.0, start_value=1.0),
    CurvePreset("Linear", CurveMode.DOUBLE_CURVE, CurveEasing.POWER, 0.0),
    *_family("Quad", CurveEasing.POWER, QUAD_TENSION),
    *_family("Cubic", CurveEasing.POWER, CUBIC_TENSION),
    *_family("Quart", CurveEasing.POWER, QUART_TENSION),
    *_family("Quint", CurveEasing.POWER, QUINT_TENSION),
    *_family("Sine", CurveEasing.SINE, 1.0),
    *_family("Expo", CurveEasing.EXPO, 1.0),
    *_family("Circ", CurveEasing.CIRC, 1.0),
)

_PRESETS_BY_NAME = {preset.name.lower(): preset for preset in CURVE_PRESETS}


def get_preset(name: str) -> CurvePreset:
    """Look up a preset by name (case-insensitive).

    Raises:
        KeyError: If no preset has that name.
    """
    try:
        return _PRESETS_BY_NAME[name.lower()]
    except KeyError:
        raise KeyError(f"Unknown curve preset: {name}") from None


def list_presets() -> list[str]:
    return [preset.name for preset in CURVE_PRESETS]
