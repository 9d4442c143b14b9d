"""v-FIT: outfit composition engine for a 3D virtual fitting room."""

from .config import VFitConfig, load_config
from .engine import OutfitEngine, compose_transform, project, preview
from .models import Category, Garment, OperationStatus

__version__ = "0.1.0"

__all__ = [
    "VFitConfig",
    "load_config",
    "OutfitEngine",
    "compose_transform",
    "project",
    "preview",
    "Category",
    "Garment",
    "OperationStatus",
]
