"""Tests for format-version classification and upgrade."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from sparklr.core.asset.versioning import (
    DEFAULT_VERSION_POLICY,
    FORMAT_VERSIONS,
    Current,
    FormatVersion,
    Incompatible,
    Outdated,
    Unknown,
    VersionPolicy,
    can_auto_upgrade,
    current_format_version,
    try_upgrade_version,
    validate_version,
)


@dataclass
class _Versioned:
    format_version: str
    payload: str = "untouched"


@pytest.fixture
def breaking_policy() -> VersionPolicy:
    """1 -> 2 upgrades automatically, 3 breaks everything before it."""
    return VersionPolicy(
        (
            FormatVersion("1"),
            FormatVersion("2"),
            FormatVersion("3", breaking=True),
            FormatVersion("4"),
        )
    )


class TestDefaultPolicy:
    """Tests against the built-in version table."""

    def test_current_is_last_entry(self) -> None:
        """The current version is the last table entry."""
        assert current_format_version() == FORMAT_VERSIONS[-1].version == "0.1"

    def test_current(self) -> None:
        """The current version classifies as Current."""
        assert validate_version("0.1") == Current()

    def test_outdated(self) -> None:
        """Older non-breaking versions classify as Outdated."""
        assert validate_version("0.0") == Outdated(found="0.0", current="0.1")

    @pytest.mark.parametrize("found", ["", "9.9", "0.2", "v0.1", "0.1 ", "latest", "é"])
    def test_unlisted_versions_are_unknown(self, found: str) -> None:
        """Anything outside the table is Unknown, never an exception."""
        assert validate_version(found) == Unknown()

    def test_loadable(self) -> None:
        """Only Current and Outdated are loadable."""
        assert validate_version("0.1").is_loadable
        assert validate_version("0.0").is_loadable
        assert not validate_version("9.9").is_loadable

    def test_default_policy_has_no_incompatible_versions(self) -> None:
        """Every known version upgrades to current."""
        for entry in FORMAT_VERSIONS[:-1]:
            assert can_auto_upgrade(entry.version, DEFAULT_VERSION_POLICY.current)


class TestCustomPolicy:
    """Tests with an injected policy."""

    def test_breaking_version_makes_older_incompatible(
        self, breaking_policy: VersionPolicy
    ) -> None:
        """Versions before a breaking entry need migration."""
        assert validate_version("1", breaking_policy) == Incompatible(found="1", current="4")
        assert validate_version("2", breaking_policy) == Incompatible(found="2", current="4")

    def test_breaking_version_itself_upgrades(self, breaking_policy: VersionPolicy) -> None:
        """The breaking version and later ones upgrade automatically."""
        assert validate_version("3", breaking_policy) == Outdated(found="3", current="4")

    def test_can_auto_upgrade_direction(self, breaking_policy: VersionPolicy) -> None:
        """Upgrades only go forward."""
        assert can_auto_upgrade("1", "2", breaking_policy)
        assert not can_auto_upgrade("2", "1", breaking_policy)
        assert not can_auto_upgrade("2", "2", breaking_policy)
        assert not can_auto_upgrade("2", "3", breaking_policy)
        assert not can_auto_upgrade("x", "2", breaking_policy)

    def test_empty_policy_rejected(self) -> None:
        """A policy needs at least one version."""
        with pytest.raises(ValueError, match="at least one"):
            VersionPolicy(())

    def test_duplicate_versions_rejected(self) -> None:
        """Each version may appear once."""
        with pytest.raises(ValueError, match="Duplicate"):
            VersionPolicy((FormatVersion("1"), FormatVersion("1")))


class TestTryUpgradeVersion:
    """Tests for try_upgrade_version()."""

    def test_outdated_is_upgraded(self) -> None:
        """Outdated assets are stamped with the current version."""
        asset = _Versioned("0.0")
        status = try_upgrade_version(asset)
        assert status == Outdated(found="0.0", current="0.1")
        assert asset.format_version == "0.1"

    def test_second_call_reports_current(self) -> None:
        """Upgrading is idempotent."""
        asset = _Versioned("0.0")
        try_upgrade_version(asset)
        assert try_upgrade_version(asset) == Current()
        assert asset.format_version == "0.1"

    def test_only_version_is_touched(self) -> None:
        """No other attribute changes."""
        asset = _Versioned("0.0")
        try_upgrade_version(asset)
        assert asset.payload == "untouched"

    @pytest.mark.parametrize("found", ["9.9", ""])
    def test_unknown_left_alone(self, found: str) -> None:
        """Unknown versions are not rewritten."""
        asset = _Versioned(found)
        assert try_upgrade_version(asset) == Unknown()
        assert asset.format_version == found

    def test_incompatible_left_alone(self, breaking_policy: VersionPolicy) -> None:
        """Incompatible versions are not rewritten."""
        asset = _Versioned("1")
        assert isinstance(try_upgrade_version(asset, breaking_policy), Incompatible)
        assert asset.format_version == "1"
