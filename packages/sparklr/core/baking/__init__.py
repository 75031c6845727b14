"""Lookup-table baking of curves and gradients."""

from sparklr.core.baking.cache import BakedTextureCache
from sparklr.core.baking.lookup import (
    DEFAULT_TEXTURE_WIDTH,
    bake_curve,
    bake_gradient,
    fallback_table,
)
from sparklr.core.baking.prepare import PreparedTextures, prepare_asset

__all__ = [
    "DEFAULT_TEXTURE_WIDTH",
    "BakedTextureCache",
    "PreparedTextures",
    "bake_curve",
    "bake_gradient",
    "fallback_table",
    "prepare_asset",
]
