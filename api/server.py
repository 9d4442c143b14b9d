"""FastAPI adapter for the v-FIT fitting room.

Thin view layer over OutfitEngine:
- sessions are created from optional `item` / `outfit` bootstrap values
- every user action maps to one engine operation
- every response carries the re-projected render list
"""

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from vfit.config import VFitConfig
from vfit.engine import OutfitEngine, preview
from vfit.exceptions import HandOffError, SessionNotFound
from vfit.models import Category, RenderInstruction, SavedOutfit
from vfit.services import (
    OutfitHandOff,
    StaticCatalog,
    build_hand_off,
    category_counts,
    distinct_brands,
    distinct_colors,
    filter_garments,
    load_catalog,
)
from vfit.services.sessions import SessionRegistry
from vfit.utils.logging import configure_logging, get_logger

from .views import (
    ActionResponse,
    CreateSessionRequest,
    GarmentView,
    HandOffResponse,
    ItemRequest,
    MoveRequest,
    PhysicsRequest,
    RotateRequest,
    SaveRequest,
    SessionView,
    action_response,
    session_view,
)

logger = get_logger(__name__)


app = FastAPI(
    title="v-FIT API",
    description="Virtual fitting room: outfit composition and render projection",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Initialized on first request
_config: VFitConfig | None = None
_catalog: StaticCatalog | None = None
_registry: SessionRegistry | None = None
_hand_off: OutfitHandOff | None = None


def get_config() -> VFitConfig:
    global _config
    if _config is None:
        _config = VFitConfig()  # Loads from .env via pydantic-settings
        configure_logging(json_logs=_config.json_logs, log_level=_config.log_level)
    return _config


def get_catalog() -> StaticCatalog:
    global _catalog
    if _catalog is None:
        _catalog = load_catalog(get_config().catalog_path)
    return _catalog


def get_registry() -> SessionRegistry:
    """Get or create the session registry."""
    global _registry
    if _registry is None:
        config = get_config()
        catalog = get_catalog()
        _registry = SessionRegistry(
            lambda: OutfitEngine.from_config(config, catalog),
            ttl_seconds=config.session_ttl_seconds,
        )
    return _registry


def get_hand_off() -> OutfitHandOff:
    global _hand_off
    if _hand_off is None:
        _hand_off = build_hand_off(get_config().outfit_store)
    return _hand_off


@app.exception_handler(SessionNotFound)
async def session_not_found(request: Request, exc: SessionNotFound):
    return JSONResponse(status_code=404, content={"success": False, "error": f"Unknown session: {exc}"})


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "v-FIT API", "version": "0.1.0"}


@app.get("/health")
async def health():
    """Detailed health check."""
    catalog = get_catalog()
    return {
        "status": "ok",
        "garments": len(catalog.list_garments()),
        "sessions": len(get_registry()),
    }


# =============================================================================
# Catalog
# =============================================================================

@app.get("/api/catalog")
def list_catalog(
    category: str | None = None,
    q: str = "",
    brand: list[str] = Query(default=[]),
    color: list[str] = Query(default=[]),
    wishlist: bool = False,
):
    """Browse the catalog with the wardrobe filters."""
    garments = get_catalog().list_garments()
    if category not in (None, "all") and category not in {c.value for c in Category}:
        raise HTTPException(status_code=422, detail=f"Unknown category: {category}")

    items = filter_garments(
        garments,
        category=category,
        query=q,
        brands=brand,
        colors=color,
        wishlist_only=wishlist,
    )
    return {
        "items": [GarmentView.from_garment(g) for g in items],
        "counts": category_counts(garments),
        "brands": distinct_brands(garments),
        "colors": distinct_colors(garments),
    }


@app.get("/api/catalog/{item_id}/preview", response_model=RenderInstruction)
def preview_item(item_id: str):
    garment = next((g for g in get_catalog().list_garments() if g.id == item_id), None)
    if garment is None:
        raise HTTPException(status_code=404, detail=f"Unknown garment: {item_id}")
    return preview(garment, physics_enabled=get_config().physics_enabled)


@app.get("/api/outfits", response_model=list[SavedOutfit])
def list_outfits():
    return list(get_catalog().list_saved_outfits())


# =============================================================================
# Fitting sessions
# =============================================================================

@app.post("/api/sessions", response_model=ActionResponse)
def create_session(request: CreateSessionRequest):
    """Start a fitting session, optionally pre-staging an item or wearing a saved outfit."""
    session = get_registry().create()
    results = session.engine.bootstrap(initial_item_id=request.item, saved_outfit_id=request.outfit)
    failed = next((r for r in results if not r.success), None)
    return ActionResponse(
        success=failed is None,
        result=failed,
        error=failed.message if failed else None,
        session=session_view(session.session_id, session.engine),
    )


@app.get("/api/sessions/{session_id}", response_model=SessionView)
def get_session(session_id: str):
    session = get_registry().get(session_id)
    return session_view(session_id, session.engine)


@app.delete("/api/sessions/{session_id}")
def end_session(session_id: str):
    return {"success": get_registry().delete(session_id)}


@app.get("/api/sessions/{session_id}/render", response_model=list[RenderInstruction])
def render(session_id: str):
    return get_registry().get(session_id).engine.project()


@app.post("/api/sessions/{session_id}/staging", response_model=ActionResponse)
def stage_item(session_id: str, request: ItemRequest):
    engine = get_registry().get(session_id).engine
    return action_response(session_id, engine, engine.enqueue(request.item_id))


@app.delete("/api/sessions/{session_id}/staging/{item_id}", response_model=ActionResponse)
def unstage_item(session_id: str, item_id: str):
    engine = get_registry().get(session_id).engine
    return action_response(session_id, engine, engine.dequeue(item_id))


@app.post("/api/sessions/{session_id}/worn", response_model=ActionResponse)
def wear_item(session_id: str, request: ItemRequest):
    engine = get_registry().get(session_id).engine
    return action_response(session_id, engine, engine.wear(request.item_id))


@app.delete("/api/sessions/{session_id}/worn/{item_id}", response_model=ActionResponse)
def remove_item(session_id: str, item_id: str):
    engine = get_registry().get(session_id).engine
    return action_response(session_id, engine, engine.unwear(item_id))


@app.post("/api/sessions/{session_id}/clear", response_model=ActionResponse)
def clear_outfit(session_id: str):
    engine = get_registry().get(session_id).engine
    return action_response(session_id, engine, engine.clear_all())


@app.post("/api/sessions/{session_id}/select", response_model=ActionResponse)
def select_item(session_id: str, request: ItemRequest):
    engine = get_registry().get(session_id).engine
    return action_response(session_id, engine, engine.select(request.item_id))


@app.get("/api/sessions/{session_id}/recommendations/{item_id}", response_model=list[GarmentView])
def recommendations(session_id: str, item_id: str):
    engine = get_registry().get(session_id).engine
    if engine.get_garment(item_id) is None:
        raise HTTPException(status_code=404, detail=f"Unknown garment: {item_id}")
    return [GarmentView.from_garment(g) for g in engine.recommendations_for(item_id)]


@app.post("/api/sessions/{session_id}/pose/move", response_model=SessionView)
def move_avatar(session_id: str, request: MoveRequest):
    engine = get_registry().get(session_id).engine
    engine.move_pose(request.delta)
    return session_view(session_id, engine)


@app.post("/api/sessions/{session_id}/pose/rotate", response_model=SessionView)
def rotate_avatar(session_id: str, request: RotateRequest):
    engine = get_registry().get(session_id).engine
    engine.rotate_pose(request.yaw)
    return session_view(session_id, engine)


@app.post("/api/sessions/{session_id}/pose/reset", response_model=SessionView)
def reset_avatar(session_id: str):
    engine = get_registry().get(session_id).engine
    engine.reset_pose()
    return session_view(session_id, engine)


@app.post("/api/sessions/{session_id}/physics", response_model=SessionView)
def toggle_physics(session_id: str, request: PhysicsRequest):
    engine = get_registry().get(session_id).engine
    engine.set_physics_enabled(request.enabled)
    return session_view(session_id, engine)


# =============================================================================
# Save / share hand-offs
# =============================================================================

@app.post("/api/sessions/{session_id}/save", response_model=HandOffResponse)
async def save_outfit(session_id: str, request: SaveRequest):
    """Hand the worn outfit to the external outfit store."""
    snapshot = get_registry().get(session_id).engine.snapshot()
    if snapshot.is_empty:
        return HandOffResponse(success=False, error="Nothing is worn")
    try:
        detail = await get_hand_off().save(snapshot, name=request.name)
    except HandOffError as e:
        return HandOffResponse(success=False, error=str(e))
    return HandOffResponse(success=True, detail=detail)


@app.post("/api/sessions/{session_id}/share", response_model=HandOffResponse)
async def share_outfit(session_id: str):
    snapshot = get_registry().get(session_id).engine.snapshot()
    if snapshot.is_empty:
        return HandOffResponse(success=False, error="Nothing is worn")
    try:
        detail = await get_hand_off().share(snapshot)
    except HandOffError as e:
        return HandOffResponse(success=False, error=str(e))
    return HandOffResponse(success=True, detail=detail)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
