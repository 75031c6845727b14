"""Closed numeric interval used for curve output ranges and random ranges."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from sparklr.core.utils.math import F32_EPSILON


class Range(BaseModel):
    """A numeric interval [min, max].

    No ordering is enforced: ``min`` may exceed ``max``, in which case
    mapping through the range inverts the direction.

    Attributes:
        min: Lower end of the interval.
        max: Upper end of the interval.

    Example:
        >>> Range(min=2.0, max=5.0).span()
        3.0
        >>> Range(min=1.0, max=1.0).span()
        1.0
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    min: float = Field(default=0.0, description="Lower end of the interval")
    max: float = Field(default=1.0, description="Upper end of the interval")

    @classmethod
    def zero(cls) -> Range:
        return cls(min=0.0, max=0.0)

    def is_zero(self) -> bool:
        return self.min == 0.0 and self.max == 0.0

    def span(self) -> float:
        """Width of the interval, or 1.0 when the interval is degenerate.

        The fallback keeps division by the span safe.
        """
        width = self.max - self.min
        if abs(width) < F32_EPSILON:
            return 1.0
        return width
