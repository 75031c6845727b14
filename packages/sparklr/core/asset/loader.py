"""Loading and saving particle system assets.

Assets are stored as JSON (``.sparklr.json``) or YAML (``.sparklr.yaml``).
Every failure surfaces as one of the ``AssetLoaderError`` kinds; an
outdated asset loads with a warning and comes back stamped with the
current format version.
"""

from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from sparklr.core.asset.errors import (
    AssetIOError,
    AssetParseError,
    IncompatibleVersionError,
    UnknownVersionError,
)
from sparklr.core.asset.models import ParticleSystemAsset
from sparklr.core.asset.versioning import (
    DEFAULT_VERSION_POLICY,
    Incompatible,
    Outdated,
    Unknown,
    VersionPolicy,
    VersionStatus,
)
from sparklr.core.utils.json import dumps_json

logger = logging.getLogger(__name__)


class AssetFormat(str, Enum):
    JSON = "json"
    YAML = "yaml"


_EXTENSIONS: dict[AssetFormat, str] = {
    AssetFormat.JSON: ".sparklr.json",
    AssetFormat.YAML: ".sparklr.yaml",
}


def _describe_path(path: str | Path | None) -> str:
    return str(path) if path is not None else "<memory>"


class ParticleSystemAssetLoader:
    """Reads and writes ``ParticleSystemAsset`` files in one format.

    Args:
        fmt: Serialization format handled by this loader.
        policy: Known format versions; defaults to the built-in table.

    Example:
        >>> loader = ParticleSystemAssetLoader(AssetFormat.JSON)
        >>> asset = loader.load("effects/sparks.sparklr.json")
    """

    def __init__(
        self,
        fmt: AssetFormat = AssetFormat.JSON,
        policy: VersionPolicy = DEFAULT_VERSION_POLICY,
    ) -> None:
        self.fmt = AssetFormat(fmt)
        self.policy = policy

    @property
    def extensions(self) -> list[str]:
        return [_EXTENSIONS[self.fmt]]

    def _deserialize(self, data: bytes, path: str | Path | None) -> Any:
        where = _describe_path(path)
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise AssetParseError(f"not valid UTF-8: {e}", path=where) from e

        if self.fmt == AssetFormat.JSON:
            try:
                return json.loads(text)
            except json.JSONDecodeError as e:
                raise AssetParseError(e.msg, path=where, line=e.lineno, column=e.colno) from e

        try:
            return yaml.safe_load(text)
        except yaml.MarkedYAMLError as e:
            mark = e.problem_mark
            line = mark.line + 1 if mark is not None else None
            column = mark.column + 1 if mark is not None else None
            raise AssetParseError(
                e.problem or str(e), path=where, line=line, column=column
            ) from e
        except yaml.YAMLError as e:
            raise AssetParseError(str(e), path=where) from e

    def load_bytes_with_status(
        self, data: bytes, path: str | Path | None = None
    ) -> tuple[ParticleSystemAsset, VersionStatus]:
        """Parse and version-check an asset, also returning its version status.

        Args:
            data: Raw file contents.
            path: Source path, used in messages only.

        Returns:
            The asset, with ``format_version`` upgraded if it was outdated,
            and the status of the version it was written with (Current or
            Outdated).

        Raises:
            AssetParseError: If the bytes are malformed or not an asset.
            IncompatibleVersionError: If the version needs manual migration.
            UnknownVersionError: If the version is not in the policy table.
        """
        where = _describe_path(path)
        raw = self._deserialize(data, path)
        if not isinstance(raw, dict):
            raise AssetParseError(
                f"expected a mapping at the top level, got {type(raw).__name__}", path=where
            )

        try:
            asset = ParticleSystemAsset.model_validate(raw)
        except ValidationError as e:
            raise AssetParseError(str(e), path=where) from e

        found = asset.format_version
        status = asset.try_upgrade_version(self.policy)
        if isinstance(status, Incompatible):
            raise IncompatibleVersionError(status.found, status.current)
        if isinstance(status, Unknown):
            raise UnknownVersionError(found)
        if isinstance(status, Outdated):
            logger.warning(
                '%s: loaded asset with format_version "%s", current is "%s"',
                where,
                status.found,
                status.current,
            )
        return asset, status

    def load_bytes(self, data: bytes, path: str | Path | None = None) -> ParticleSystemAsset:
        """Parse and version-check an asset. See ``load_bytes_with_status``."""
        asset, _ = self.load_bytes_with_status(data, path)
        return asset

    def load_with_status(self, path: str | Path) -> tuple[ParticleSystemAsset, VersionStatus]:
        """Read an asset from disk. See ``load_bytes_with_status``.

        Raises:
            AssetIOError: If the file cannot be read.
        """
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise AssetIOError(str(path), str(e)) from e
        logger.debug("Loading asset %s (%d bytes)", path, len(data))
        return self.load_bytes_with_status(data, path)

    def load(self, path: str | Path) -> ParticleSystemAsset:
        asset, _ = self.load_with_status(path)
        return asset

    def dumps(self, asset: ParticleSystemAsset) -> str:
        data = asset.model_dump(mode="json")
        if self.fmt == AssetFormat.JSON:
            return dumps_json(data)
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)

    def save(self, asset: ParticleSystemAsset, path: str | Path) -> None:
        """Write an asset to disk in this loader's format.

        Raises:
            AssetIOError: If the file cannot be written.
        """
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(self.dumps(asset), encoding="utf-8")
        except OSError as e:
            raise AssetIOError(str(path), str(e)) from e
        logger.info("Saved asset %s (format_version %s)", path, asset.format_version)


LOADERS: list[ParticleSystemAssetLoader] = [
    ParticleSystemAssetLoader(AssetFormat.JSON),
    ParticleSystemAssetLoader(AssetFormat.YAML),
]


def loader_for_path(path: str | Path) -> ParticleSystemAssetLoader:
    """Pick the registered loader whose extension matches ``path``.

    Raises:
        ValueError: If no loader handles the extension.

    Example:
        >>> loader_for_path("fire.sparklr.yaml").fmt
        <AssetFormat.YAML: 'yaml'>
    """
    name = Path(path).name.lower()
    for loader in LOADERS:
        if any(name.endswith(ext) for ext in loader.extensions):
            return loader
    raise ValueError(f"Unsupported asset extension: {Path(path).name}")
