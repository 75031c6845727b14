"""Deterministic fingerprinting for cache keys.

Cache keys must be identical across processes and platforms, so the
builtin ``hash()`` (salted per process for str) is never used. Values are
fed into a SHA-256 digest as tagged little-endian bit patterns and the key
is the first 8 bytes of the digest read as an unsigned 64-bit integer.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any

import numpy as np

_TAG_F32 = b"f"
_TAG_F64 = b"d"
_TAG_U8 = b"u"
_TAG_U64 = b"q"
_TAG_BOOL = b"b"
_TAG_STR = b"s"
_TAG_NONE = b"n"


def _normalize_zero(value: float) -> float:
    # -0.0 == 0.0 but their bit patterns differ
    return 0.0 if value == 0.0 else float(value)


class CacheKeyHasher:
    """Incremental hasher producing a stable 64-bit cache key.

    Example:
        >>> key = CacheKeyHasher().write_f32(0.5).write_u8(1).finish()
        >>> isinstance(key, int)
        True
    """

    def __init__(self) -> None:
        self._digest = hashlib.sha256()

    def write_f32(self, value: float) -> CacheKeyHasher:
        """Hash the single-precision bit pattern of value."""
        self._digest.update(_TAG_F32)
        self._digest.update(np.array(_normalize_zero(value), dtype="<f4").tobytes())
        return self

    def write_f64(self, value: float) -> CacheKeyHasher:
        """Hash the double-precision bit pattern of value."""
        self._digest.update(_TAG_F64)
        self._digest.update(np.array(_normalize_zero(value), dtype="<f8").tobytes())
        return self

    def write_u8(self, value: int) -> CacheKeyHasher:
        """Hash a small discriminant (0..255)."""
        if not 0 <= value <= 255:
            raise ValueError(f"u8 out of range: {value}")
        self._digest.update(_TAG_U8)
        self._digest.update(bytes([value]))
        return self

    def write_u64(self, value: int) -> CacheKeyHasher:
        """Hash an unsigned 64-bit integer, e.g. a nested cache key."""
        self._digest.update(_TAG_U64)
        self._digest.update(value.to_bytes(8, "little"))
        return self

    def write_bool(self, value: bool) -> CacheKeyHasher:
        self._digest.update(_TAG_BOOL)
        self._digest.update(b"\x01" if value else b"\x00")
        return self

    def write_str(self, value: str) -> CacheKeyHasher:
        """Hash a length-prefixed UTF-8 string."""
        encoded = value.encode("utf-8")
        self._digest.update(_TAG_STR)
        self._digest.update(len(encoded).to_bytes(8, "little"))
        self._digest.update(encoded)
        return self

    def write_optional_str(self, value: str | None) -> CacheKeyHasher:
        if value is None:
            self._digest.update(_TAG_NONE)
            return self
        return self.write_str(value)

    def write_f32s(self, values: list[float] | tuple[float, ...]) -> CacheKeyHasher:
        for value in values:
            self.write_f32(value)
        return self

    def finish(self) -> int:
        """Return the cache key as an unsigned 64-bit integer."""
        return int.from_bytes(self._digest.digest()[:8], "little")

    def hexdigest(self) -> str:
        return self._digest.hexdigest()


def compute_fingerprint(payload: Any) -> str:
    """Compute a SHA-256 fingerprint of a JSON-compatible payload.

    The payload is canonicalized (sorted keys, compact separators) before
    hashing so that logically equal payloads always fingerprint the same.

    Args:
        payload: JSON-compatible data (dicts, lists, scalars)

    Returns:
        SHA-256 hex digest
    """
    canonical = json.dumps(
        payload,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
