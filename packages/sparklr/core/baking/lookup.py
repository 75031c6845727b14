"""Bake curves and gradients into 1-D RGBA8 lookup tables.

A lookup table is a ``uint8`` array of shape ``(width, 4)`` whose texel
``i`` holds the sample at ``t = i / (width - 1)``.
"""

from __future__ import annotations

import numpy as np

from sparklr.core.curves.models import CurveTexture
from sparklr.core.curves.sampling import sample_uniform_grid
from sparklr.core.gradients.models import Gradient

DEFAULT_TEXTURE_WIDTH = 256


def bake_curve(curve: CurveTexture, width: int = DEFAULT_TEXTURE_WIDTH) -> np.ndarray:
    """Bake a curve into a greyscale lookup table.

    Each sample is normalized through the curve's range, clamped to [0, 1]
    and stored in R, G and B; alpha is always 255.

    Args:
        curve: Curve to bake.
        width: Number of texels (>= 2).

    Returns:
        uint8 array of shape (width, 4).

    Raises:
        ValueError: If width < 2.
    """
    ts = sample_uniform_grid(width)
    values = np.array([curve.sample_normalized(t) for t in ts], dtype=np.float64)
    grey = (np.clip(values, 0.0, 1.0) * 255.0).astype(np.uint8)

    table = np.empty((width, 4), dtype=np.uint8)
    table[:, 0] = grey
    table[:, 1] = grey
    table[:, 2] = grey
    table[:, 3] = 255
    return table


def bake_gradient(gradient: Gradient, width: int = DEFAULT_TEXTURE_WIDTH) -> np.ndarray:
    """Bake a gradient into an RGBA lookup table.

    Channels are scaled by 255, clamped to [0, 255] and truncated.

    Raises:
        ValueError: If width < 2.
    """
    ts = sample_uniform_grid(width)
    colors = np.array([gradient.sample(t) for t in ts], dtype=np.float32)
    return np.clip(colors * 255.0, 0.0, 255.0).astype(np.uint8)


def fallback_table() -> np.ndarray:
    """Single opaque-white texel used when nothing has been baked."""
    return np.full((1, 4), 255, dtype=np.uint8)
