"""Outfit composition engine, transform composer and render projection."""

from .composition import OutfitEngine
from .transforms import compose_transform
from .projection import project, preview

__all__ = [
    "OutfitEngine",
    "compose_transform",
    "project",
    "preview",
]
