"""Catalog accessor and wardrobe query helpers."""

import json
from collections.abc import Iterable, Sequence
from importlib import resources
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError

from ..exceptions import CatalogError
from ..models import Category, Garment, SavedOutfit
from ..utils.logging import get_logger

logger = get_logger(__name__)


class CatalogAccessor(Protocol):
    """Read-only source of garments and saved outfits."""

    def list_garments(self) -> Sequence[Garment]: ...

    def list_saved_outfits(self) -> Sequence[SavedOutfit]: ...


class StaticCatalog:
    """Catalog held in memory, optionally loaded from a JSON file.

    The JSON document has two top-level keys, ``garments`` and ``outfits``,
    each a list of objects matching the ``Garment`` / ``SavedOutfit`` models.
    """

    def __init__(
        self,
        garments: Iterable[Garment] = (),
        outfits: Iterable[SavedOutfit] = (),
    ):
        self._garments = tuple(garments)
        self._outfits = tuple(outfits)

        seen: set[str] = set()
        for garment in self._garments:
            if garment.id in seen:
                raise CatalogError(f"Duplicate garment id in catalog: {garment.id!r}")
            seen.add(garment.id)

    @classmethod
    def from_dict(cls, data: dict) -> "StaticCatalog":
        try:
            garments = [Garment.model_validate(g) for g in data.get("garments", [])]
            outfits = [SavedOutfit.model_validate(o) for o in data.get("outfits", [])]
        except ValidationError as e:
            raise CatalogError(f"Invalid catalog entry: {e}") from e
        return cls(garments, outfits)

    @classmethod
    def from_json(cls, path: Path) -> "StaticCatalog":
        """Load a catalog from a JSON file."""
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogError(f"Cannot read catalog {path}: {e}") from e

        catalog = cls.from_dict(data)
        logger.info(
            "Catalog loaded",
            path=str(path),
            garments=len(catalog._garments),
            outfits=len(catalog._outfits),
        )
        return catalog

    @classmethod
    def demo(cls) -> "StaticCatalog":
        """The catalog bundled with the package."""
        text = resources.files("vfit.data").joinpath("catalog.json").read_text(encoding="utf-8")
        return cls.from_dict(json.loads(text))

    def list_garments(self) -> Sequence[Garment]:
        return self._garments

    def list_saved_outfits(self) -> Sequence[SavedOutfit]:
        return self._outfits


def load_catalog(path: Path | None = None) -> StaticCatalog:
    """Load the catalog at ``path``, or the bundled demo catalog."""
    if path is None:
        return StaticCatalog.demo()
    return StaticCatalog.from_json(path)


def filter_garments(
    garments: Iterable[Garment],
    category: Category | str | None = None,
    query: str = "",
    brands: Iterable[str] = (),
    colors: Iterable[str] = (),
    wishlist_only: bool = False,
) -> list[Garment]:
    """Filter garments the way the wardrobe browser does.

    Args:
        category: Category to keep; None or "all" keeps every category
        query: Case-insensitive substring matched against name or brand
        brands: Keep only these brands (empty = no brand filter)
        colors: Keep only these colors (empty = no color filter)
        wishlist_only: Keep only wishlisted garments
    """
    if category == "all":
        category = None
    if category is not None:
        category = Category(category)
    needle = query.strip().lower()
    brand_set = set(brands)
    color_set = set(colors)

    results = []
    for garment in garments:
        if category is not None and garment.category != category:
            continue
        if needle and needle not in garment.name.lower() and needle not in garment.brand.lower():
            continue
        if brand_set and garment.brand not in brand_set:
            continue
        if color_set and garment.color not in color_set:
            continue
        if wishlist_only and not garment.is_wishlisted:
            continue
        results.append(garment)
    return results


def category_counts(garments: Iterable[Garment]) -> dict[str, int]:
    """Count garments per category, with an ``all`` total first."""
    counts = {"all": 0}
    counts.update({category.value: 0 for category in Category})
    for garment in garments:
        counts["all"] += 1
        counts[garment.category.value] += 1
    return counts


def distinct_brands(garments: Iterable[Garment]) -> list[str]:
    return list(dict.fromkeys(g.brand for g in garments))


def distinct_colors(garments: Iterable[Garment]) -> list[str]:
    return list(dict.fromkeys(g.color for g in garments))
