"""Errors raised while loading particle system assets.

Every load failure is one of four kinds, all subclasses of
``AssetLoaderError``. None of them is recoverable: a failed load never
returns partial or default data.
"""

from __future__ import annotations


class AssetLoaderError(Exception):
    """Base exception for asset loading failures."""


class AssetIOError(AssetLoaderError):
    """Reading the asset failed. The OSError is chained as ``__cause__``."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"Could not load asset: {reason}")


class AssetParseError(AssetLoaderError):
    """The bytes are not a valid asset of the expected shape.

    Attributes:
        path: Asset path, if known.
        line: 1-based line of the syntax error, if the parser reports one.
        column: 1-based column of the syntax error, if the parser reports one.
    """

    def __init__(
        self,
        reason: str,
        *,
        path: str | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        self.path = path
        self.line = line
        self.column = column
        self.reason = reason
        location = f" (line {line}, column {column})" if line is not None else ""
        super().__init__(f"Could not parse asset{location}: {reason}")


class UnknownVersionError(AssetLoaderError):
    """The asset declares a format version this sparklr does not know."""

    def __init__(self, found: str) -> None:
        self.found = found
        super().__init__("Unknown format_version. You may need a newer version of sparklr.")


class IncompatibleVersionError(AssetLoaderError):
    """The asset's format version needs manual migration.

    Attributes:
        found: Version declared by the asset, verbatim.
        current: Current format version, verbatim.
    """

    def __init__(self, found: str, current: str) -> None:
        self.found = found
        self.current = current
        super().__init__(
            f'Asset version "{found}" is incompatible with current version "{current}". '
            "Manual migration is required."
        )
