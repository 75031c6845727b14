"""In-memory cache of baked lookup tables keyed by cache key."""

from __future__ import annotations

import logging

import numpy as np

from sparklr.core.baking.lookup import DEFAULT_TEXTURE_WIDTH, bake_curve, bake_gradient
from sparklr.core.curves.models import CurveTexture
from sparklr.core.gradients.models import Gradient

logger = logging.getLogger(__name__)


class BakedTextureCache:
    """Memoizes baked curve and gradient tables.

    Value-equal curves or gradients share one table. Not thread-safe; owned
    by a single caller.

    Example:
        >>> cache = BakedTextureCache()
        >>> table = cache.get_or_create(Gradient())
        >>> cache.get(Gradient()) is table
        True
    """

    def __init__(self, width: int = DEFAULT_TEXTURE_WIDTH) -> None:
        if width < 2:
            raise ValueError("width must be >= 2")
        self.width = width
        self._curves: dict[int, np.ndarray] = {}
        self._gradients: dict[int, np.ndarray] = {}

    def _store(self, source: CurveTexture | Gradient) -> dict[int, np.ndarray]:
        return self._curves if isinstance(source, CurveTexture) else self._gradients

    def get_or_create(self, source: CurveTexture | Gradient) -> np.ndarray:
        """Return the baked table for source, baking it on first request."""
        store = self._store(source)
        key = source.cache_key()
        table = store.get(key)
        if table is None:
            logger.debug("Baking %s table (key=%016x)", type(source).__name__, key)
            if isinstance(source, CurveTexture):
                table = bake_curve(source, self.width)
            else:
                table = bake_gradient(source, self.width)
            # Shared between callers, so never writable.
            table.setflags(write=False)
            store[key] = table
        return table

    def get(self, source: CurveTexture | Gradient) -> np.ndarray | None:
        return self._store(source).get(source.cache_key())

    def clear(self) -> None:
        self._curves.clear()
        self._gradients.clear()

    def __len__(self) -> int:
        return len(self._curves) + len(self._gradients)
