"""Tests for BakedTextureCache."""

from __future__ import annotations

import pytest

from sparklr.core.baking.cache import BakedTextureCache
from sparklr.core.curves.models import CurveTexture
from sparklr.core.gradients.models import Gradient


class TestBakedTextureCache:
    """Tests for BakedTextureCache."""

    def test_value_equal_sources_share_table(self, linear_ramp: CurveTexture) -> None:
        """Equal curves resolve to the same table object."""
        cache = BakedTextureCache(width=8)
        first = cache.get_or_create(linear_ramp)
        second = cache.get_or_create(linear_ramp.model_copy())
        assert first is second
        assert len(cache) == 1

    def test_tables_are_read_only(self) -> None:
        """Cached tables cannot be written through."""
        table = BakedTextureCache(width=4).get_or_create(Gradient())
        with pytest.raises(ValueError):
            table[0, 0] = 1

    def test_get_before_bake_is_none(self) -> None:
        """get() does not bake."""
        cache = BakedTextureCache(width=4)
        assert cache.get(Gradient()) is None
        table = cache.get_or_create(Gradient())
        assert cache.get(Gradient()) is table

    def test_curves_and_gradients_stored_separately(self, linear_ramp: CurveTexture) -> None:
        """A curve and a gradient never collide."""
        cache = BakedTextureCache(width=4)
        cache.get_or_create(linear_ramp)
        cache.get_or_create(Gradient())
        assert len(cache) == 2

    def test_width_is_applied(self) -> None:
        """Tables are baked at the cache's width."""
        assert BakedTextureCache(width=32).get_or_create(Gradient()).shape == (32, 4)

    def test_clear(self, linear_ramp: CurveTexture) -> None:
        """clear() drops every table."""
        cache = BakedTextureCache(width=4)
        cache.get_or_create(linear_ramp)
        cache.clear()
        assert len(cache) == 0
        assert cache.get(linear_ramp) is None

    def test_invalid_width(self) -> None:
        """Widths below 2 are rejected at construction."""
        with pytest.raises(ValueError, match="width"):
            BakedTextureCache(width=1)
