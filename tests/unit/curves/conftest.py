"""Shared pytest fixtures for curve tests."""

from __future__ import annotations

import pytest

from sparklr.core.curves.enums import CurveEasing, CurveMode
from sparklr.core.curves.models import CurvePoint, CurveTexture

# Dense grid over [0, 1], endpoints included.
GRID = [i / 40 for i in range(41)]


@pytest.fixture
def grid() -> list[float]:
    """Normalized positions used for property-style checks."""
    return list(GRID)


@pytest.fixture
def hold_curve() -> CurveTexture:
    """Two points whose second segment holds: 0.2 until t=1, then 0.9."""
    return CurveTexture(
        points=[
            CurvePoint(position=0.0, value=0.2),
            CurvePoint(position=1.0, value=0.9, mode=CurveMode.HOLD),
        ]
    )


@pytest.fixture(params=list(CurveEasing))
def easing(request: pytest.FixtureRequest) -> CurveEasing:
    """Every easing family."""
    return request.param
