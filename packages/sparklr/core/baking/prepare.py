"""Bake every lookup table an asset needs."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np

from sparklr.core.asset.models import ParticleSystemAsset
from sparklr.core.baking.cache import BakedTextureCache
from sparklr.core.utils.logging import log_performance

logger = logging.getLogger(__name__)


@dataclass
class PreparedTextures:
    """Baked tables of one asset, keyed by field path (``emitters.<i>.<path>``).

    Curves that are constant over lifetime are not baked; they are listed in
    ``constant_curves`` with their value so the consumer can bind a
    ``fallback_table`` and a uniform instead.
    """

    curves: dict[str, np.ndarray] = field(default_factory=dict)
    gradients: dict[str, np.ndarray] = field(default_factory=dict)
    constant_curves: dict[str, float] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.curves) + len(self.gradients)


@log_performance
def prepare_asset(asset: ParticleSystemAsset, cache: BakedTextureCache) -> PreparedTextures:
    """Bake the curves and gradients of every emitter through ``cache``.

    Args:
        asset: Asset to prepare.
        cache: Shared cache; value-equal sources across emitters and assets
            reuse one table.

    Returns:
        The baked tables for this asset.
    """
    prepared = PreparedTextures()
    for index, emitter in enumerate(asset.emitters):
        prefix = f"emitters.{index}"
        for path, curve in emitter.curves():
            if curve.is_constant():
                prepared.constant_curves[f"{prefix}.{path}"] = curve.sample(0.0)
                continue
            prepared.curves[f"{prefix}.{path}"] = cache.get_or_create(curve)
        for path, gradient in emitter.gradients():
            prepared.gradients[f"{prefix}.{path}"] = cache.get_or_create(gradient)

    logger.debug(
        "Prepared %s: %d curve tables, %d gradient tables, %d constant curves",
        asset.name,
        len(prepared.curves),
        len(prepared.gradients),
        len(prepared.constant_curves),
    )
    return prepared
