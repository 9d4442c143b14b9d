# Test fixtures and configuration
import pytest
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from vfit.engine import OutfitEngine
from vfit.models import AvatarPose, Garment, LocalOffset, PhysicsHints, SavedOutfit, Vector3
from vfit.services import StaticCatalog


def make_garment(garment_id: str, category: str, **kwargs) -> Garment:
    defaults = {
        "name": garment_id.upper(),
        "brand": "TestBrand",
        "color": "Black",
        "model_ref": f"/{garment_id}.glb",
    }
    defaults.update(kwargs)
    return Garment(id=garment_id, category=category, **defaults)


@pytest.fixture
def garments():
    """A small catalog: two tops, two bottoms, one of each other category."""
    return {
        "T1": make_garment("T1", "tops", brand="StyleCorp", color="White"),
        "T2": make_garment("T2", "tops", brand="PatternPro", color="Blue"),
        "B1": make_garment("B1", "bottoms", brand="DenimCo", color="Black"),
        "B2": make_garment("B2", "bottoms", brand="ComfortFit", color="Khaki"),
        "D1": make_garment("D1", "dresses", brand="Bloom", color="Red", is_wishlisted=True),
        "O1": make_garment(
            "O1",
            "outerwear",
            brand="RetroWear",
            color="Blue",
            local_offset=LocalOffset(position=Vector3(x=0, y=-1, z=0.01), scale=1.05),
            physics_hints=PhysicsHints(mass=0.8, elasticity=0.1),
        ),
        "S1": make_garment("S1", "shoes", brand="StepUp", color="White"),
        "A1": make_garment("A1", "accessories", brand="DenimCo", color="Brown"),
    }


@pytest.fixture
def saved_outfits():
    return [
        SavedOutfit(id="work", name="Work Meeting", garment_ids=["T2", "B2", "S1"]),
        SavedOutfit(id="stale", name="Old Look", garment_ids=["T1", "gone-item", "B1"]),
        SavedOutfit(id="double", name="Two Tops", garment_ids=["T1", "T2"]),
    ]


@pytest.fixture
def catalog(garments, saved_outfits):
    return StaticCatalog(garments.values(), saved_outfits)


@pytest.fixture
def initial_pose():
    return AvatarPose(position=Vector3(x=0.0, y=-1.0, z=0.0))


@pytest.fixture
def engine(catalog, initial_pose):
    return OutfitEngine(catalog, initial_pose)
