"""Shared pytest fixtures for gradient tests."""

from __future__ import annotations

import pytest

from sparklr.core.gradients.enums import GradientInterpolation
from sparklr.core.gradients.models import Gradient, GradientStop

RED = (1.0, 0.0, 0.0, 1.0)
GREEN = (0.0, 1.0, 0.0, 1.0)
BLUE = (0.0, 0.0, 1.0, 0.5)


@pytest.fixture
def rgb_gradient() -> Gradient:
    """Red at 0, green at 0.5, blue at 1, linear."""
    return Gradient(
        stops=[
            GradientStop(color=RED, position=0.0),
            GradientStop(color=GREEN, position=0.5),
            GradientStop(color=BLUE, position=1.0),
        ]
    )


@pytest.fixture(params=list(GradientInterpolation))
def interpolation(request: pytest.FixtureRequest) -> GradientInterpolation:
    """Every interpolation mode."""
    return request.param
