"""Tests for gradient and colour models."""

from __future__ import annotations

import pytest
from pydantic import TypeAdapter, ValidationError

from sparklr.core.gradients.enums import GradientInterpolation
from sparklr.core.gradients.models import (
    BLACK,
    WHITE,
    Gradient,
    GradientColor,
    GradientStop,
    SolidColor,
    SolidOrGradientColor,
)


class TestGradient:
    """Tests for Gradient."""

    def test_default_is_black_to_white(self) -> None:
        """Default gradient blends black to white linearly."""
        gradient = Gradient()
        assert [(s.color, s.position) for s in gradient.stops] == [(BLACK, 0.0), (WHITE, 1.0)]
        assert gradient.interpolation == GradientInterpolation.LINEAR

    def test_white_is_constant(self) -> None:
        """Gradient.white() samples white everywhere."""
        gradient = Gradient.white()
        for t in (0.0, 0.4, 1.0):
            assert gradient.sample(t) == WHITE

    def test_frozen(self) -> None:
        """Gradients are immutable."""
        with pytest.raises(ValidationError):
            Gradient().interpolation = GradientInterpolation.STEPS  # type: ignore[misc]

    def test_interpolation_serializes_by_name(self) -> None:
        """Interpolation is persisted as its variant name."""
        data = Gradient(interpolation=GradientInterpolation.SMOOTHSTEP).model_dump(mode="json")
        assert data["interpolation"] == "Smoothstep"


class TestGradientCacheKey:
    """Tests for Gradient.cache_key()."""

    def test_value_equal_gradients_share_key(self) -> None:
        """Equal gradients hash the same."""
        assert Gradient().cache_key() == Gradient().cache_key()

    def test_negative_zero_equals_zero(self) -> None:
        """-0.0 components and positions hash like 0.0."""
        a = Gradient(stops=[GradientStop(color=(0.0, 0.0, 0.0, 1.0), position=0.0)])
        b = Gradient(stops=[GradientStop(color=(-0.0, -0.0, 0.0, 1.0), position=-0.0)])
        assert a.cache_key() == b.cache_key()

    def test_interpolation_changes_key(self) -> None:
        """Interpolation mode is hashed."""
        stepped = Gradient(interpolation=GradientInterpolation.STEPS)
        assert stepped.cache_key() != Gradient().cache_key()

    def test_colour_changes_key(self) -> None:
        """Stop colours are hashed."""
        assert Gradient.white().cache_key() != Gradient().cache_key()


class TestSolidOrGradientColor:
    """Tests for the solid-or-gradient colour union."""

    def test_solid_helpers(self) -> None:
        """Solid colours expose their colour."""
        solid = SolidColor(color=(0.1, 0.2, 0.3, 1.0))
        assert solid.is_solid()
        assert not solid.is_gradient()
        assert solid.as_solid_color() == (0.1, 0.2, 0.3, 1.0)

    def test_gradient_helpers(self) -> None:
        """Gradient colours have no single colour."""
        color = GradientColor()
        assert color.is_gradient()
        assert not color.is_solid()
        assert color.as_solid_color() is None

    def test_discriminated_by_kind(self) -> None:
        """The kind tag selects the variant."""
        adapter = TypeAdapter(SolidOrGradientColor)
        assert isinstance(adapter.validate_python({"kind": "Solid"}), SolidColor)
        parsed = adapter.validate_python(
            {"kind": "Gradient", "gradient": {"interpolation": "Steps"}}
        )
        assert isinstance(parsed, GradientColor)
        assert parsed.gradient.interpolation == GradientInterpolation.STEPS

    def test_unknown_kind_rejected(self) -> None:
        """Unknown tags fail validation."""
        with pytest.raises(ValidationError):
            TypeAdapter(SolidOrGradientColor).validate_python({"kind": "Texture"})
