"""Shared value types."""

from sparklr.core.models.range import Range

__all__ = ["Range"]
