"""Deterministic cache keys for baked lookup tables and materials."""

from sparklr.core.caching.fingerprint import CacheKeyHasher, compute_fingerprint

__all__ = [
    "CacheKeyHasher",
    "compute_fingerprint",
]
