"""Particle system assets: models, format versioning, and file loading."""

from sparklr.core.asset.errors import (
    AssetIOError,
    AssetLoaderError,
    AssetParseError,
    IncompatibleVersionError,
    UnknownVersionError,
)
from sparklr.core.asset.fields import FieldPathError, get_field, set_field
from sparklr.core.asset.loader import (
    LOADERS,
    AssetFormat,
    ParticleSystemAssetLoader,
    loader_for_path,
)
from sparklr.core.asset.material import (
    AlphaMode,
    AlphaModeKind,
    CustomShaderMaterial,
    StandardParticleMaterial,
    TextureRef,
    material_cache_key,
)
from sparklr.core.asset.models import (
    ColliderData,
    EmitterData,
    ParticleFlags,
    ParticleSystemAsset,
    ParticleSystemAuthors,
    ParticleSystemDimension,
)
from sparklr.core.asset.versioning import (
    DEFAULT_VERSION_POLICY,
    FORMAT_VERSIONS,
    Current,
    FormatVersion,
    Incompatible,
    Outdated,
    Unknown,
    VersionPolicy,
    VersionStatus,
    can_auto_upgrade,
    current_format_version,
    try_upgrade_version,
    validate_version,
)

__all__ = [
    "DEFAULT_VERSION_POLICY",
    "FORMAT_VERSIONS",
    "LOADERS",
    "AlphaMode",
    "AlphaModeKind",
    "AssetFormat",
    "AssetIOError",
    "AssetLoaderError",
    "AssetParseError",
    "ColliderData",
    "Current",
    "CustomShaderMaterial",
    "EmitterData",
    "FieldPathError",
    "FormatVersion",
    "Incompatible",
    "IncompatibleVersionError",
    "Outdated",
    "ParticleFlags",
    "ParticleSystemAsset",
    "ParticleSystemAssetLoader",
    "ParticleSystemAuthors",
    "ParticleSystemDimension",
    "StandardParticleMaterial",
    "TextureRef",
    "Unknown",
    "UnknownVersionError",
    "VersionPolicy",
    "VersionStatus",
    "can_auto_upgrade",
    "current_format_version",
    "get_field",
    "loader_for_path",
    "material_cache_key",
    "set_field",
    "try_upgrade_version",
    "validate_version",
]
