"""Draw-pass material descriptions.

These are renderer-agnostic descriptions: converting them into a
renderer's own material types is left to the host. Each carries a
deterministic ``cache_key`` so hosts can share one renderer material
between value-equal descriptions.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from sparklr.core.caching.fingerprint import CacheKeyHasher
from sparklr.core.gradients.models import WHITE, Color

Face = Literal["Front", "Back"]


class AlphaModeKind(str, Enum):
    OPAQUE = "Opaque"
    MASK = "Mask"
    BLEND = "Blend"
    PREMULTIPLIED = "Premultiplied"
    ADD = "Add"
    MULTIPLY = "Multiply"
    ALPHA_TO_COVERAGE = "AlphaToCoverage"

    @property
    def discriminant(self) -> int:
        return list(AlphaModeKind).index(self)


class AlphaMode(BaseModel):
    """Blending mode; ``cutoff`` applies to Mask only."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: AlphaModeKind = AlphaModeKind.OPAQUE
    cutoff: float | None = Field(default=None, description="Alpha cutoff for Mask mode")

    @model_validator(mode="after")
    def _validate_cutoff(self) -> AlphaMode:
        if self.kind == AlphaModeKind.MASK and self.cutoff is None:
            raise ValueError("Mask alpha mode requires a cutoff")
        if self.kind != AlphaModeKind.MASK and self.cutoff is not None:
            raise ValueError(f"{self.kind.value} alpha mode does not take a cutoff")
        return self


class TextureRef(BaseModel):
    """Reference to a texture: a bundled preset name, an asset path, or a local file."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["Preset", "Asset", "Local"]
    path: str = Field(..., description="Preset name or file path")


class StandardParticleMaterial(BaseModel):
    """PBR material parameters for a particle draw pass.

    Defaults match an opaque, white, half-rough dielectric with back-face
    culling.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, ser_json_inf_nan="constants")

    kind: Literal["Standard"] = "Standard"

    base_color: Color = WHITE
    base_color_texture: TextureRef | None = None
    emissive: Color = (0.0, 0.0, 0.0, 1.0)
    emissive_texture: TextureRef | None = None
    emissive_exposure_weight: float = 0.0
    alpha_mode: AlphaMode = Field(default_factory=AlphaMode)
    perceptual_roughness: float = 0.5
    metallic: float = 0.0
    reflectance: float = 0.5
    metallic_roughness_texture: TextureRef | None = None
    normal_map_texture: TextureRef | None = None
    flip_normal_map_y: bool = False
    occlusion_texture: TextureRef | None = None
    specular_tint: Color = WHITE
    diffuse_transmission: float = 0.0
    specular_transmission: float = 0.0
    thickness: float = 0.0
    ior: float = 1.5
    attenuation_distance: float = math.inf
    attenuation_color: Color = WHITE
    clearcoat: float = 0.0
    clearcoat_perceptual_roughness: float = 0.5
    anisotropy_strength: float = 0.0
    anisotropy_rotation: float = 0.0
    double_sided: bool = False
    cull_mode: Face | None = "Back"
    unlit: bool = False
    fog_enabled: bool = True
    depth_bias: float = 0.0

    def cache_key(self) -> int:
        """Stable 64-bit key over every field."""
        h = CacheKeyHasher()
        h.write_f32s(self.base_color)
        _write_texture(h, self.base_color_texture)
        h.write_f32s(self.emissive)
        _write_texture(h, self.emissive_texture)
        h.write_f32(self.emissive_exposure_weight)
        h.write_u8(self.alpha_mode.kind.discriminant)
        if self.alpha_mode.cutoff is not None:
            h.write_f32(self.alpha_mode.cutoff)
        h.write_f32(self.perceptual_roughness)
        h.write_f32(self.metallic)
        h.write_f32(self.reflectance)
        _write_texture(h, self.metallic_roughness_texture)
        _write_texture(h, self.normal_map_texture)
        h.write_bool(self.flip_normal_map_y)
        _write_texture(h, self.occlusion_texture)
        h.write_f32s(self.specular_tint)
        h.write_f32(self.diffuse_transmission)
        h.write_f32(self.specular_transmission)
        h.write_f32(self.thickness)
        h.write_f32(self.ior)
        h.write_f32(self.attenuation_distance)
        h.write_f32s(self.attenuation_color)
        h.write_f32(self.clearcoat)
        h.write_f32(self.clearcoat_perceptual_roughness)
        h.write_f32(self.anisotropy_strength)
        h.write_f32(self.anisotropy_rotation)
        h.write_bool(self.double_sided)
        h.write_optional_str(self.cull_mode)
        h.write_bool(self.unlit)
        h.write_bool(self.fog_enabled)
        h.write_f32(self.depth_bias)
        return h.finish()


class CustomShaderMaterial(BaseModel):
    """Draw pass rendered with user-supplied shaders."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["CustomShader"] = "CustomShader"
    vertex_shader: str | None = None
    fragment_shader: str | None = None

    def cache_key(self) -> int:
        h = CacheKeyHasher()
        h.write_u8(1)
        h.write_optional_str(self.vertex_shader)
        h.write_optional_str(self.fragment_shader)
        return h.finish()


def _write_texture(hasher: CacheKeyHasher, texture: TextureRef | None) -> None:
    if texture is None:
        hasher.write_optional_str(None)
        return
    hasher.write_str(texture.kind)
    hasher.write_str(texture.path)


DrawPassMaterial = Annotated[
    StandardParticleMaterial | CustomShaderMaterial, Field(discriminator="kind")
]


def material_cache_key(material: StandardParticleMaterial | CustomShaderMaterial) -> int:
    """Cache key of a draw-pass material, tagged by material variant."""
    if isinstance(material, CustomShaderMaterial):
        return material.cache_key()
    return CacheKeyHasher().write_u8(0).write_u64(material.cache_key()).finish()
