"""Asset format versions and compatibility classification.

A ``VersionPolicy`` is an ordered table of every known format version; the
last entry is the current version. Classification of a found version:

- equal to current: ``Current``
- not in the table (newer, malformed, empty): ``Unknown``
- no breaking version between it and current: ``Outdated``
- otherwise: ``Incompatible``

The policy is an ordinary value passed to the functions below, so callers
and tests can classify against any table without touching global state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class FormatVersion:
    """One known format version.

    Attributes:
        version: Version string as written in asset files.
        breaking: True if assets older than this version need manual migration.
    """

    version: str
    breaking: bool = False


@dataclass(frozen=True)
class VersionStatus:
    """Base of the four classification results."""

    label = "unknown"

    @property
    def is_loadable(self) -> bool:
        return False


@dataclass(frozen=True)
class Current(VersionStatus):
    """The asset version matches the current format version."""

    label = "current"

    @property
    def is_loadable(self) -> bool:
        return True


@dataclass(frozen=True)
class Outdated(VersionStatus):
    """The asset version is older but upgrades automatically."""

    found: str
    current: str
    label = "outdated"

    @property
    def is_loadable(self) -> bool:
        return True


@dataclass(frozen=True)
class Incompatible(VersionStatus):
    """The asset version is older, with breaking changes since."""

    found: str
    current: str
    label = "incompatible"


@dataclass(frozen=True)
class Unknown(VersionStatus):
    """The asset version is not in the table, likely from a newer sparklr."""

    label = "unknown"


@dataclass(frozen=True)
class VersionPolicy:
    """Ordered table of known format versions; the last one is current.

    Raises:
        ValueError: If the table is empty or lists a version twice.

    Example:
        >>> policy = VersionPolicy((FormatVersion("1"), FormatVersion("2", breaking=True)))
        >>> policy.current
        '2'
        >>> policy.validate("1")
        Incompatible(found='1', current='2')
    """

    versions: tuple[FormatVersion, ...]

    def __post_init__(self) -> None:
        if not self.versions:
            raise ValueError("VersionPolicy needs at least one format version")
        names = [v.version for v in self.versions]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate format versions in policy: {names}")

    @property
    def current(self) -> str:
        return self.versions[-1].version

    def index_of(self, version: str) -> int | None:
        for i, entry in enumerate(self.versions):
            if entry.version == version:
                return i
        return None

    def can_auto_upgrade(self, from_version: str, to_version: str) -> bool:
        """True if from_version precedes to_version with no breaking version after it."""
        from_idx = self.index_of(from_version)
        to_idx = self.index_of(to_version)
        if from_idx is None or to_idx is None or from_idx >= to_idx:
            return False
        return not any(v.breaking for v in self.versions[from_idx + 1 : to_idx + 1])

    def validate(self, found: str) -> VersionStatus:
        """Classify a found version string. Total: never raises."""
        current = self.current
        if found == current:
            return Current()
        if self.index_of(found) is None:
            return Unknown()
        if self.can_auto_upgrade(found, current):
            return Outdated(found=found, current=current)
        return Incompatible(found=found, current=current)


FORMAT_VERSIONS: tuple[FormatVersion, ...] = (
    FormatVersion("0.0"),  # initial
    FormatVersion("0.1"),
)

DEFAULT_VERSION_POLICY = VersionPolicy(FORMAT_VERSIONS)


class VersionedAsset(Protocol):
    format_version: str


def current_format_version(policy: VersionPolicy = DEFAULT_VERSION_POLICY) -> str:
    return policy.current


def can_auto_upgrade(
    from_version: str,
    to_version: str,
    policy: VersionPolicy = DEFAULT_VERSION_POLICY,
) -> bool:
    return policy.can_auto_upgrade(from_version, to_version)


def validate_version(found: str, policy: VersionPolicy = DEFAULT_VERSION_POLICY) -> VersionStatus:
    """Classify an asset's declared format version.

    Args:
        found: Version string read from the asset.
        policy: Known format versions.

    Returns:
        Exactly one of Current, Outdated, Incompatible or Unknown.
    """
    return policy.validate(found)


def try_upgrade_version(
    asset: VersionedAsset,
    policy: VersionPolicy = DEFAULT_VERSION_POLICY,
) -> VersionStatus:
    """Upgrade an outdated asset's version string in place.

    Only ``format_version`` is touched, and only when the asset is
    Outdated. The status from before the upgrade is returned, so a second
    call on the same asset reports Current.

    Args:
        asset: Object with a mutable ``format_version`` string.
        policy: Known format versions.

    Returns:
        The classification of the version the asset had on entry.
    """
    status = policy.validate(asset.format_version)
    if isinstance(status, Outdated):
        asset.format_version = policy.current
    return status
