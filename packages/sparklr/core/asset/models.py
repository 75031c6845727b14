"""Particle system asset models.

A ``ParticleSystemAsset`` is the persisted description of one effect: a
list of emitters (each with timing, draw pass, emission, scale, angle,
colours, velocities, accelerations, turbulence, collision and an optional
sub-emitter), plus colliders and author credits.

Container models are mutable so editors can assign fields in place; the
value types they hold (curves, gradients, ranges) are frozen.
"""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum, IntFlag
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sparklr.core.asset.material import DrawPassMaterial, StandardParticleMaterial
from sparklr.core.asset.versioning import (
    DEFAULT_VERSION_POLICY,
    VersionPolicy,
    VersionStatus,
    try_upgrade_version,
)
from sparklr.core.curves.models import CurveTexture
from sparklr.core.gradients.models import Gradient, SolidColor, SolidOrGradientColor
from sparklr.core.models.range import Range

Vec2 = tuple[float, float]
Vec3 = tuple[float, float, float]

ZERO3: Vec3 = (0.0, 0.0, 0.0)
ONE3: Vec3 = (1.0, 1.0, 1.0)


class _Model(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
        ser_json_inf_nan="constants",
    )


class ParticleFlags(IntFlag):
    """Per-particle behaviour bits."""

    NONE = 0
    ROTATE_Y = 1 << 1
    DISABLE_Z = 1 << 2


_KNOWN_FLAGS = int(ParticleFlags.ROTATE_Y | ParticleFlags.DISABLE_Z)


class ParticleSystemDimension(str, Enum):
    D3 = "D3"
    D2 = "D2"


class DrawOrder(str, Enum):
    """Order in which particles are drawn."""

    INDEX = "Index"
    LIFETIME = "Lifetime"
    REVERSE_LIFETIME = "ReverseLifetime"
    VIEW_DEPTH = "ViewDepth"


class TransformAlign(str, Enum):
    BILLBOARD = "Billboard"
    Y_TO_VELOCITY = "YToVelocity"
    BILLBOARD_Y_TO_VELOCITY = "BillboardYToVelocity"
    BILLBOARD_FIXED_Y = "BillboardFixedY"


class SubEmitterMode(str, Enum):
    CONSTANT = "Constant"
    AT_END = "AtEnd"
    AT_COLLISION = "AtCollision"
    AT_START = "AtStart"


# ============================================================================
# Meshes
# ============================================================================


class QuadMesh(_Model):
    kind: Literal["Quad"] = "Quad"
    orientation: Literal["FaceX", "FaceY", "FaceZ"] = "FaceZ"
    size: Vec2 = (1.0, 1.0)
    subdivide: Vec2 = (0.0, 0.0)


class SphereMesh(_Model):
    kind: Literal["Sphere"] = "Sphere"
    radius: float = 1.0


class CuboidMesh(_Model):
    kind: Literal["Cuboid"] = "Cuboid"
    half_size: Vec3 = (0.5, 0.5, 0.5)


class CylinderMesh(_Model):
    kind: Literal["Cylinder"] = "Cylinder"
    top_radius: float = 0.5
    bottom_radius: float = 0.5
    height: float = 1.0
    radial_segments: int = Field(default=16, ge=3)
    rings: int = Field(default=1, ge=1)
    cap_top: bool = True
    cap_bottom: bool = True


class PrismMesh(_Model):
    kind: Literal["Prism"] = "Prism"
    left_to_right: float = 0.5
    size: Vec3 = ONE3
    subdivide: Vec3 = ZERO3


ParticleMesh = Annotated[
    QuadMesh | SphereMesh | CuboidMesh | CylinderMesh | PrismMesh,
    Field(discriminator="kind"),
]


# ============================================================================
# Emission shapes
# ============================================================================


class PointShape(_Model):
    kind: Literal["Point"] = "Point"


class SphereShape(_Model):
    kind: Literal["Sphere"] = "Sphere"
    radius: float = 1.0


class SphereSurfaceShape(_Model):
    kind: Literal["SphereSurface"] = "SphereSurface"
    radius: float = 1.0


class BoxShape(_Model):
    kind: Literal["Box"] = "Box"
    extents: Vec3 = ONE3


class RingShape(_Model):
    kind: Literal["Ring"] = "Ring"
    axis: Vec3 = (0.0, 0.0, 1.0)
    height: float = 1.0
    radius: float = 1.0
    inner_radius: float = 0.0


EmissionShape = Annotated[
    PointShape | SphereShape | SphereSurfaceShape | BoxShape | RingShape,
    Field(discriminator="kind"),
]


# ============================================================================
# Emitter sections
# ============================================================================


class EmitterTime(_Model):
    """Timing and lifecycle of an emitter."""

    lifetime: float = Field(default=1.0, gt=0.0, description="Particle lifetime in seconds")
    lifetime_randomness: float = Field(default=0.0, ge=0.0, le=1.0)
    delay: float = Field(default=0.0, ge=0.0, description="Delay before the first emission")
    one_shot: bool = False
    explosiveness: float = Field(default=0.0, ge=0.0, le=1.0)
    spawn_time_randomness: float = Field(default=0.0, ge=0.0, le=1.0)
    fixed_fps: int = Field(default=0, ge=0, description="0 = simulate every frame")
    fixed_seed: int | None = Field(default=None, ge=0)

    def total_duration(self) -> float:
        """Length of one emission cycle including the delay."""
        return self.delay + self.lifetime


class EmitterDrawPass(_Model):
    draw_order: DrawOrder = DrawOrder.INDEX
    mesh: ParticleMesh = Field(default_factory=SphereMesh)
    material: DrawPassMaterial = Field(default_factory=StandardParticleMaterial)
    shadow_caster: bool = True
    transform_align: TransformAlign | None = None


class EmitterEmission(_Model):
    offset: Vec3 = ZERO3
    scale: Vec3 = ONE3
    shape: EmissionShape = Field(default_factory=PointShape)
    particles_amount: int = Field(default=8, ge=0)


def _unit_range() -> Range:
    return Range(min=1.0, max=1.0)


class EmitterScale(_Model):
    range: Range = Field(default_factory=_unit_range)
    scale_over_lifetime: CurveTexture | None = None


class EmitterAngle(_Model):
    range: Range = Field(default_factory=Range.zero)
    angle_over_lifetime: CurveTexture | None = None


class EmitterColors(_Model):
    initial_color: SolidOrGradientColor = Field(default_factory=SolidColor)
    color_over_lifetime: Gradient = Field(default_factory=Gradient.white)
    alpha_over_lifetime: CurveTexture | None = None
    emission_over_lifetime: CurveTexture | None = None


class AnimatedVelocity(_Model):
    velocity: Range = Field(default_factory=Range.zero)
    velocity_over_lifetime: CurveTexture | None = None


class EmitterVelocities(_Model):
    initial_direction: Vec3 = (1.0, 0.0, 0.0)
    spread: float = Field(default=45.0, description="Cone half-angle in degrees")
    flatness: float = 0.0
    initial_velocity: Range = Field(default_factory=Range.zero)
    radial_velocity: AnimatedVelocity = Field(default_factory=AnimatedVelocity)
    angular_velocity: AnimatedVelocity = Field(default_factory=AnimatedVelocity)
    pivot: Vec3 = ZERO3
    inherit_ratio: float = 0.0


class EmitterAccelerations(_Model):
    gravity: Vec3 = (0.0, -9.8, 0.0)


def _turbulence_influence() -> Range:
    return Range(min=0.0, max=0.1)


class EmitterTurbulence(_Model):
    enabled: bool = False
    noise_strength: float = 1.0
    noise_scale: float = 2.5
    noise_speed: Vec3 = ZERO3
    noise_speed_random: float = 0.0
    influence: Range = Field(default_factory=_turbulence_influence)
    influence_over_lifetime: CurveTexture | None = None


class RigidCollision(_Model):
    kind: Literal["Rigid"] = "Rigid"
    friction: float = 0.0
    bounce: float = 0.0


class HideOnContactCollision(_Model):
    kind: Literal["HideOnContact"] = "HideOnContact"


EmitterCollisionMode = Annotated[
    RigidCollision | HideOnContactCollision, Field(discriminator="kind")
]


class EmitterCollision(_Model):
    mode: EmitterCollisionMode | None = None
    use_scale: bool = False
    base_size: float = 0.01


class SubEmitterConfig(_Model):
    mode: SubEmitterMode = SubEmitterMode.CONSTANT
    target_emitter: int = Field(default=0, ge=0, description="Index into the asset's emitters")
    frequency: float = 4.0
    amount: int = Field(default=1, ge=0)
    keep_velocity: bool = False


class EmitterData(_Model):
    """Complete configuration of one emitter."""

    name: str = "Emitter"
    enabled: bool = True
    position: Vec3 = ZERO3
    time: EmitterTime = Field(default_factory=EmitterTime)
    draw_pass: EmitterDrawPass = Field(default_factory=EmitterDrawPass)
    emission: EmitterEmission = Field(default_factory=EmitterEmission)
    scale: EmitterScale = Field(default_factory=EmitterScale)
    angle: EmitterAngle = Field(default_factory=EmitterAngle)
    colors: EmitterColors = Field(default_factory=EmitterColors)
    velocities: EmitterVelocities = Field(default_factory=EmitterVelocities)
    accelerations: EmitterAccelerations = Field(default_factory=EmitterAccelerations)
    turbulence: EmitterTurbulence = Field(default_factory=EmitterTurbulence)
    collision: EmitterCollision = Field(default_factory=EmitterCollision)
    sub_emitter: SubEmitterConfig | None = None
    particle_flags: int = Field(default=0, ge=0, description="Bitwise OR of ParticleFlags")

    @field_validator("particle_flags")
    @classmethod
    def _check_flags(cls, value: int) -> int:
        unknown = value & ~_KNOWN_FLAGS
        if unknown:
            raise ValueError(f"Unknown particle flag bits: {unknown:#x}")
        return value

    @property
    def flags(self) -> ParticleFlags:
        return ParticleFlags(self.particle_flags)

    def has_flag(self, flag: ParticleFlags) -> bool:
        return bool(self.particle_flags & flag)

    def curves(self) -> Iterator[tuple[str, CurveTexture]]:
        """Yield (field path, curve) for every curve set on this emitter."""
        candidates = {
            "scale.scale_over_lifetime": self.scale.scale_over_lifetime,
            "angle.angle_over_lifetime": self.angle.angle_over_lifetime,
            "colors.alpha_over_lifetime": self.colors.alpha_over_lifetime,
            "colors.emission_over_lifetime": self.colors.emission_over_lifetime,
            "velocities.radial_velocity.velocity_over_lifetime": (
                self.velocities.radial_velocity.velocity_over_lifetime
            ),
            "velocities.angular_velocity.velocity_over_lifetime": (
                self.velocities.angular_velocity.velocity_over_lifetime
            ),
            "turbulence.influence_over_lifetime": self.turbulence.influence_over_lifetime,
        }
        for path, curve in candidates.items():
            if curve is not None:
                yield path, curve

    def gradients(self) -> Iterator[tuple[str, Gradient]]:
        """Yield (field path, gradient) for every gradient on this emitter."""
        initial = self.colors.initial_color
        if initial.is_gradient():
            yield "colors.initial_color.gradient", initial.gradient
        yield "colors.color_over_lifetime", self.colors.color_over_lifetime


# ============================================================================
# Colliders and asset
# ============================================================================


class BoxColliderShape(_Model):
    kind: Literal["Box"] = "Box"
    size: Vec3 = ONE3


class SphereColliderShape(_Model):
    kind: Literal["Sphere"] = "Sphere"
    radius: float = 1.0


ColliderShape = Annotated[
    BoxColliderShape | SphereColliderShape, Field(discriminator="kind")
]


class ColliderData(_Model):
    name: str = "Collider"
    enabled: bool = True
    shape: ColliderShape = Field(default_factory=SphereColliderShape)
    position: Vec3 = ZERO3


class ParticleSystemAuthors(_Model):
    submitted_by: str
    inspired_by: str | None = None


class ParticleSystemAsset(_Model):
    """A complete particle effect.

    Attributes:
        format_version: Asset format version the file was written with.
        name: Display name.
        dimension: 3D or 2D simulation.
        emitters: Emitters, drawn in order.
        colliders: Collision shapes shared by all emitters.
        authors: Optional credits.

    Example:
        >>> asset = ParticleSystemAsset.new("Sparks", emitters=[EmitterData()])
        >>> asset.format_version == DEFAULT_VERSION_POLICY.current
        True
    """

    format_version: str = Field(..., description="Asset format version")
    name: str
    dimension: ParticleSystemDimension = ParticleSystemDimension.D3
    emitters: list[EmitterData] = Field(default_factory=list)
    colliders: list[ColliderData] = Field(default_factory=list)
    authors: ParticleSystemAuthors | None = None

    @classmethod
    def new(
        cls,
        name: str,
        dimension: ParticleSystemDimension = ParticleSystemDimension.D3,
        emitters: list[EmitterData] | None = None,
        colliders: list[ColliderData] | None = None,
        authors: ParticleSystemAuthors | None = None,
        policy: VersionPolicy = DEFAULT_VERSION_POLICY,
    ) -> ParticleSystemAsset:
        """Create an asset stamped with the current format version."""
        return cls(
            format_version=policy.current,
            name=name,
            dimension=dimension,
            emitters=emitters or [],
            colliders=colliders or [],
            authors=authors,
        )

    def try_upgrade_version(self, policy: VersionPolicy = DEFAULT_VERSION_POLICY) -> VersionStatus:
        """Upgrade ``format_version`` in place if outdated; return the prior status."""
        return try_upgrade_version(self, policy)
