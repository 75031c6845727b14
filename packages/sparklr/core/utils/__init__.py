"""Shared utilities for sparklr."""

from sparklr.core.utils.json import read_json, write_json
from sparklr.core.utils.math import clamp, lerp, smoothstep, to_f32

__all__ = [
    "clamp",
    "lerp",
    "read_json",
    "smoothstep",
    "to_f32",
    "write_json",
]
