"""Shared pytest fixtures for sparklr tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from sparklr.core.asset.models import EmitterData, ParticleSystemAsset
from sparklr.core.curves.enums import CurveMode
from sparklr.core.curves.models import CurvePoint, CurveTexture

# ============================================================================
# Path Fixtures
# ============================================================================


@pytest.fixture
def fixtures_dir() -> Path:
    """Get test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def assets_dir(fixtures_dir: Path) -> Path:
    """Directory of sample .sparklr.json / .sparklr.yaml files."""
    return fixtures_dir / "assets"


# ============================================================================
# Curve Fixtures
# ============================================================================


@pytest.fixture
def linear_ramp() -> CurveTexture:
    """Two-point SingleCurve ramp from 0 to 1 with zero tension."""
    return CurveTexture(
        points=[
            CurvePoint(position=0.0, value=0.0, mode=CurveMode.SINGLE_CURVE),
            CurvePoint(position=1.0, value=1.0, mode=CurveMode.SINGLE_CURVE),
        ]
    )


@pytest.fixture
def three_point_curve() -> CurveTexture:
    """Rise then fall: 0 -> 1 -> 0.25."""
    return CurveTexture(
        points=[
            CurvePoint(position=0.0, value=0.0),
            CurvePoint(position=0.4, value=1.0, tension=0.3),
            CurvePoint(position=1.0, value=0.25, mode=CurveMode.SINGLE_CURVE, tension=-0.6),
        ]
    )


# ============================================================================
# Asset Fixtures
# ============================================================================


@pytest.fixture
def simple_asset() -> ParticleSystemAsset:
    """Current-version asset with one default emitter."""
    return ParticleSystemAsset.new("Simple", emitters=[EmitterData(name="Main")])
