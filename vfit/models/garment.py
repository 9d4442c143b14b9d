"""Garment catalog models."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Category(str, Enum):
    """Closed set of garment categories, in display order."""

    TOPS = "tops"
    BOTTOMS = "bottoms"
    DRESSES = "dresses"
    OUTERWEAR = "outerwear"
    SHOES = "shoes"
    ACCESSORIES = "accessories"


class Vector3(BaseModel):
    """Immutable (x, y, z) triple. Accepts a 3-element list on input."""

    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @model_validator(mode="before")
    @classmethod
    def _from_sequence(cls, data):
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise ValueError(f"expected 3 components, got {len(data)}")
            x, y, z = data
            return {"x": x, "y": y, "z": z}
        return data

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(x=self.x + other.x, y=self.y + other.y, z=self.z + other.z)

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


class LocalOffset(BaseModel):
    """Garment placement relative to the avatar origin."""

    model_config = ConfigDict(frozen=True)

    position: Vector3 = Field(default_factory=Vector3)
    rotation: Vector3 = Field(default_factory=Vector3, description="Euler angles in radians")
    scale: Vector3 = Field(default_factory=lambda: Vector3(x=1.0, y=1.0, z=1.0))

    @field_validator("scale", mode="before")
    @classmethod
    def _uniform_scale(cls, value):
        # Catalog entries may give a single number for uniform scale
        if isinstance(value, (int, float)):
            return {"x": value, "y": value, "z": value}
        return value

    @classmethod
    def identity(cls) -> "LocalOffset":
        return cls()


class PhysicsHints(BaseModel):
    """Cloth simulation hints. Opaque to the engine, forwarded to the renderer."""

    model_config = ConfigDict(frozen=True)

    mass: float | None = None
    elasticity: float | None = None
    friction: float | None = None
    damping: float | None = None


class Garment(BaseModel):
    """A single catalog clothing entry."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    id: str
    category: Category
    name: str
    brand: str = ""
    color: str = ""
    fabric: str = ""
    model_ref: str = Field(description="Asset reference handed to the renderer, e.g. '/tshirt.glb'")
    local_offset: LocalOffset = Field(default_factory=LocalOffset)

    # Fit labels per body region, e.g. {"chest": "relaxed"}
    fit_data: dict[str, str] | None = None
    physics_hints: PhysicsHints | None = None

    # Wardrobe display attributes
    size: str | None = None
    is_new: bool = False
    is_wishlisted: bool = False


class SavedOutfit(BaseModel):
    """A previously saved outfit, as listed by the catalog."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    garment_ids: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def item_count(self) -> int:
        return len(self.garment_ids)
