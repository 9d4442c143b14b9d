"""External collaborators: catalog, outfit hand-offs and session registry."""

from .catalog import (
    CatalogAccessor,
    StaticCatalog,
    load_catalog,
    filter_garments,
    category_counts,
    distinct_brands,
    distinct_colors,
)
from .outfit_store import OutfitHandOff, LoggingHandOff, HttpOutfitHandOff, build_hand_off

__all__ = [
    "CatalogAccessor",
    "StaticCatalog",
    "load_catalog",
    "filter_garments",
    "category_counts",
    "distinct_brands",
    "distinct_colors",
    "OutfitHandOff",
    "LoggingHandOff",
    "HttpOutfitHandOff",
    "build_hand_off",
]
