"""Response models and view helpers for the fitting-room API."""

from pydantic import BaseModel, Field

from vfit.engine import OutfitEngine, project
from vfit.models import (
    AvatarPose,
    Category,
    Garment,
    OperationResult,
    RenderInstruction,
    Vector3,
)

CATEGORY_GLYPHS: dict[Category, str] = {
    Category.TOPS: "👕",
    Category.BOTTOMS: "👖",
    Category.DRESSES: "👗",
    Category.OUTERWEAR: "🧥",
    Category.SHOES: "👟",
    Category.ACCESSORIES: "👜",
}


def glyph_for(category: Category) -> str:
    return CATEGORY_GLYPHS.get(category, "👔")


class GarmentView(BaseModel):
    """Garment as shown in lists and the inspector panel."""
    id: str
    name: str
    brand: str
    color: str
    category: Category
    glyph: str
    fit_data: dict[str, str] | None = None

    @classmethod
    def from_garment(cls, garment: Garment) -> "GarmentView":
        return cls(
            id=garment.id,
            name=garment.name,
            brand=garment.brand,
            color=garment.color,
            category=garment.category,
            glyph=glyph_for(garment.category),
            fit_data=garment.fit_data,
        )


class SessionView(BaseModel):
    """Everything the fitting room needs to redraw."""
    session_id: str
    staging: list[GarmentView]
    worn: list[GarmentView]
    selected: GarmentView | None = None
    pose: AvatarPose
    physics_enabled: bool
    render: list[RenderInstruction]


class ActionResponse(BaseModel):
    """Envelope for engine actions."""
    success: bool
    result: OperationResult | None = None
    error: str | None = None
    session: SessionView | None = None


class CreateSessionRequest(BaseModel):
    item: str | None = None  # initial garment to stage
    outfit: str | None = None  # saved outfit to wear


class ItemRequest(BaseModel):
    item_id: str


class MoveRequest(BaseModel):
    delta: Vector3


class RotateRequest(BaseModel):
    yaw: float


class PhysicsRequest(BaseModel):
    enabled: bool


class SaveRequest(BaseModel):
    name: str | None = None


class HandOffResponse(BaseModel):
    success: bool
    detail: dict | None = None
    error: str | None = None


def session_view(session_id: str, engine: OutfitEngine) -> SessionView:
    state = engine.state()
    selected = engine.selected_garment
    return SessionView(
        session_id=session_id,
        staging=[GarmentView.from_garment(g) for g in state.staging],
        worn=[GarmentView.from_garment(g) for g in state.worn.values()],
        selected=GarmentView.from_garment(selected) if selected else None,
        pose=state.pose,
        physics_enabled=state.physics_enabled,
        render=project(state),
    )


def action_response(session_id: str, engine: OutfitEngine, result: OperationResult) -> ActionResponse:
    return ActionResponse(
        success=result.success,
        result=result,
        error=None if result.success else result.message,
        session=session_view(session_id, engine),
    )
