"""Avatar pose and render-side models."""

from pydantic import BaseModel, ConfigDict, Field

from .garment import Category, Garment, PhysicsHints, Vector3


class AvatarPose(BaseModel):
    """Avatar placement in the scene. Independent of garments."""

    position: Vector3 = Field(default_factory=Vector3)
    rotation: Vector3 = Field(default_factory=Vector3)


class WorldTransform(BaseModel):
    """Resolved world-space transform for one renderable."""

    model_config = ConfigDict(frozen=True)

    position: Vector3
    rotation: Vector3
    scale: Vector3


class RenderInstruction(BaseModel):
    """One entry of the render list consumed by the external renderer."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model_ref: str
    transform: WorldTransform
    physics_hints: PhysicsHints | None = None

    # None for the avatar itself
    garment_id: str | None = None
    category: Category | None = None


class EngineState(BaseModel):
    """Read-only copy of the engine state used for projection."""

    model_config = ConfigDict(frozen=True)

    staging: list[Garment] = Field(default_factory=list)
    worn: dict[Category, Garment] = Field(default_factory=dict)
    selected: str | None = None
    pose: AvatarPose = Field(default_factory=AvatarPose)
    physics_enabled: bool = False
    avatar_model_ref: str = "/avatar.glb"
