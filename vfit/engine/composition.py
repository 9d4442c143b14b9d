"""Outfit composition engine: staging queue, worn outfit and avatar pose."""

import threading
from collections.abc import Sequence

from ..config import VFitConfig
from ..models import (
    AvatarPose,
    Category,
    EngineState,
    Garment,
    OperationResult,
    OperationStatus,
    OutfitSnapshot,
    RenderInstruction,
    SnapshotEntry,
    Vector3,
)
from ..services.catalog import CatalogAccessor, StaticCatalog, load_catalog
from ..utils.logging import get_logger
from . import projection

logger = get_logger(__name__)

GarmentRef = Garment | str


class OutfitEngine:
    """Tracks staged and worn garments for one fitting-room session.

    Invariants:
    - ``worn`` holds at most one garment per category.
    - A garment is never both staged and worn; wear/unwear/clear_all move
      garments between the two, never copy or drop them.
    - ``selected`` is either None or the id of a worn garment.

    Mutating operations return an ``OperationResult`` instead of raising;
    any non-OK result leaves the state untouched. Public operations hold a
    re-entrant lock so calls from a threaded adapter never interleave.
    """

    def __init__(
        self,
        catalog: CatalogAccessor | Sequence[Garment],
        initial_pose: AvatarPose | None = None,
        *,
        recommendation_limit: int = 3,
        physics_enabled: bool = False,
        avatar_model_ref: str = "/avatar.glb",
    ):
        if not hasattr(catalog, "list_garments"):
            catalog = StaticCatalog(catalog)
        self.catalog = catalog
        self._garments: tuple[Garment, ...] = tuple(catalog.list_garments())
        self._by_id = {g.id: g for g in self._garments}

        self.recommendation_limit = recommendation_limit
        self.avatar_model_ref = avatar_model_ref
        self._physics_enabled = physics_enabled

        self._initial_pose = (initial_pose or AvatarPose()).model_copy(deep=True)
        self._pose = self._initial_pose.model_copy(deep=True)

        self._staging: list[Garment] = []
        self._worn: dict[Category, Garment] = {}
        self._selected: str | None = None

        self._lock = threading.RLock()

    @classmethod
    def from_config(cls, config: VFitConfig, catalog: CatalogAccessor | None = None) -> "OutfitEngine":
        """Create an engine using the configured catalog, avatar and limits."""
        if catalog is None:
            catalog = load_catalog(config.catalog_path)
        return cls(
            catalog,
            config.avatar.initial_pose(),
            recommendation_limit=config.recommendations.limit,
            physics_enabled=config.physics_enabled,
            avatar_model_ref=config.avatar.model_ref,
        )

    # =========================================================================
    # Read access
    # =========================================================================

    @property
    def garments(self) -> tuple[Garment, ...]:
        return self._garments

    @property
    def staging(self) -> list[Garment]:
        with self._lock:
            return list(self._staging)

    @property
    def worn(self) -> dict[Category, Garment]:
        """Worn garments keyed by category, in category declaration order."""
        with self._lock:
            return {c: self._worn[c] for c in Category if c in self._worn}

    @property
    def selected(self) -> str | None:
        return self._selected

    @property
    def selected_garment(self) -> Garment | None:
        with self._lock:
            if self._selected is None:
                return None
            return self._find_worn(self._selected)

    @property
    def pose(self) -> AvatarPose:
        with self._lock:
            return self._pose.model_copy(deep=True)

    @property
    def physics_enabled(self) -> bool:
        return self._physics_enabled

    def get_garment(self, item_id: str) -> Garment | None:
        return self._by_id.get(item_id)

    def is_staged(self, item_id: str) -> bool:
        with self._lock:
            return any(g.id == item_id for g in self._staging)

    def is_worn(self, item_id: str) -> bool:
        with self._lock:
            return self._find_worn(item_id) is not None

    # =========================================================================
    # Staging and wearing
    # =========================================================================

    def enqueue(self, item: GarmentRef) -> OperationResult:
        """Append a garment to the staging queue unless it is already staged or worn."""
        with self._lock:
            garment = self._resolve(item)
            if garment is None:
                return self._invalid(item, "enqueue")

            if self.is_staged(garment.id):
                return OperationResult.noop(garment.id, "already staged")
            if self.is_worn(garment.id):
                return OperationResult.noop(garment.id, "already worn")

            self._staging.append(garment)
            logger.debug("Garment staged", item_id=garment.id, category=garment.category.value)
            return OperationResult.ok(garment.id)

    def dequeue(self, item: GarmentRef) -> OperationResult:
        """Remove a garment from the staging queue."""
        with self._lock:
            garment = self._resolve(item)
            if garment is None:
                return self._invalid(item, "dequeue")

            if not self.is_staged(garment.id):
                logger.info("Dequeue rejected", item_id=garment.id, reason="not staged")
                return OperationResult.failure(OperationStatus.NOT_STAGED, garment.id, "garment is not staged")

            self._staging = [g for g in self._staging if g.id != garment.id]
            logger.debug("Garment unstaged", item_id=garment.id)
            return OperationResult.ok(garment.id)

    def wear(self, item: GarmentRef) -> OperationResult:
        """Put a garment on the avatar.

        The item does not have to be staged; an unstaged catalog item is
        treated as an implicit enqueue followed by wear. Any other garment of
        the same category is evicted to the end of the staging queue.
        Re-wearing the garment already worn only re-selects it.
        """
        with self._lock:
            garment = self._resolve(item)
            if garment is None:
                return self._invalid(item, "wear")

            current = self._worn.get(garment.category)
            if current is not None and current.id == garment.id:
                self._selected = garment.id
                return OperationResult.noop(garment.id, "already worn")

            evicted_id = None
            if current is not None:
                self._staging.append(current)
                evicted_id = current.id

            self._worn[garment.category] = garment
            self._staging = [g for g in self._staging if g.id != garment.id]
            self._selected = garment.id

            logger.info(
                "Garment worn",
                item_id=garment.id,
                category=garment.category.value,
                evicted_id=evicted_id,
            )
            return OperationResult.ok(garment.id, evicted_id=evicted_id)

    def unwear(self, item: GarmentRef) -> OperationResult:
        """Take a garment off and push it to the end of the staging queue."""
        with self._lock:
            garment = self._resolve(item)
            if garment is None:
                return self._invalid(item, "unwear")

            if self._find_worn(garment.id) is None:
                logger.info("Unwear rejected", item_id=garment.id, reason="not worn")
                return OperationResult.failure(OperationStatus.NOT_WORN, garment.id, "garment is not worn")

            del self._worn[garment.category]
            self._staging.append(garment)
            if self._selected == garment.id:
                self._selected = None

            logger.info("Garment removed", item_id=garment.id, category=garment.category.value)
            return OperationResult.ok(garment.id)

    def clear_all(self) -> OperationResult:
        """Move every worn garment back to staging, in category order."""
        with self._lock:
            if not self._worn:
                return OperationResult.noop(None, "nothing worn")

            removed = [self._worn[c] for c in Category if c in self._worn]
            self._staging.extend(removed)
            self._worn.clear()
            self._selected = None

            logger.info("Outfit cleared", item_ids=[g.id for g in removed])
            return OperationResult.ok(None, message=f"{len(removed)} garments returned to staging")

    def select(self, item: GarmentRef) -> OperationResult:
        """Point the inspector at a worn garment."""
        with self._lock:
            garment = self._resolve(item)
            if garment is None:
                return self._invalid(item, "select")
            if self._find_worn(garment.id) is None:
                return OperationResult.failure(OperationStatus.NOT_WORN, garment.id, "garment is not worn")
            self._selected = garment.id
            return OperationResult.ok(garment.id)

    # =========================================================================
    # Recommendations
    # =========================================================================

    def recommendations_for(self, item: GarmentRef, limit: int | None = None) -> list[Garment]:
        """Garments that pair with ``item``: other categories, not staged, not worn.

        Catalog order, truncated to ``limit`` (the configured limit by default).
        """
        if limit is None:
            limit = self.recommendation_limit

        with self._lock:
            garment = item if isinstance(item, Garment) else self._resolve(item)
            if garment is None:
                logger.info("Recommendations skipped", item_id=item, reason="invalid reference")
                return []

            taken = {g.id for g in self._staging} | {g.id for g in self._worn.values()}
            picks = []
            for candidate in self._garments:
                if len(picks) >= limit:
                    break
                if candidate.id == garment.id or candidate.category == garment.category:
                    continue
                if candidate.id in taken:
                    continue
                picks.append(candidate)
            return picks

    # =========================================================================
    # Pose
    # =========================================================================

    def move_pose(self, delta: Vector3 | Sequence[float]) -> AvatarPose:
        """Translate the avatar. No ground or collision clamping."""
        if not isinstance(delta, Vector3):
            delta = Vector3.model_validate(delta)
        with self._lock:
            self._pose.position = self._pose.position + delta
            return self._pose.model_copy(deep=True)

    def rotate_pose(self, delta_yaw: float) -> AvatarPose:
        """Turn the avatar about the vertical axis. Yaw is left unbounded."""
        with self._lock:
            self._pose.rotation = self._pose.rotation + Vector3(y=delta_yaw)
            return self._pose.model_copy(deep=True)

    def reset_pose(self) -> AvatarPose:
        with self._lock:
            self._pose = self._initial_pose.model_copy(deep=True)
            return self._pose.model_copy(deep=True)

    def set_physics_enabled(self, enabled: bool) -> None:
        """Toggle the physics pass-through hint for the renderer."""
        with self._lock:
            self._physics_enabled = enabled

    # =========================================================================
    # Snapshots and projection
    # =========================================================================

    def snapshot(self) -> OutfitSnapshot:
        """Serializable copy of the worn outfit for save/share hand-offs."""
        with self._lock:
            return OutfitSnapshot(
                items=[SnapshotEntry(id=g.id, name=g.name) for g in self.worn.values()]
            )

    def state(self) -> EngineState:
        with self._lock:
            return EngineState(
                staging=list(self._staging),
                worn=self.worn,
                selected=self._selected,
                pose=self._pose.model_copy(deep=True),
                physics_enabled=self._physics_enabled,
                avatar_model_ref=self.avatar_model_ref,
            )

    def project(self) -> list[RenderInstruction]:
        return projection.project(self.state())

    # =========================================================================
    # Session bootstrap
    # =========================================================================

    def bootstrap(
        self,
        initial_item_id: str | None = None,
        saved_outfit_id: str | None = None,
    ) -> list[OperationResult]:
        """Apply session start parameters.

        A saved outfit is worn garment by garment in its stored order;
        garment ids the catalog no longer knows are skipped. An initial item
        is staged afterwards.
        """
        results = []
        with self._lock:
            if saved_outfit_id is not None:
                results.append(self._wear_saved_outfit(saved_outfit_id))
            if initial_item_id is not None:
                results.append(self.enqueue(initial_item_id))
        return results

    def _wear_saved_outfit(self, outfit_id: str) -> OperationResult:
        outfit = next((o for o in self.catalog.list_saved_outfits() if o.id == outfit_id), None)
        if outfit is None:
            logger.warning("Saved outfit not found", outfit_id=outfit_id)
            return OperationResult.failure(
                OperationStatus.INVALID_REFERENCE, outfit_id, "unknown saved outfit"
            )

        skipped = []
        for garment_id in outfit.garment_ids:
            result = self.wear(garment_id)
            if result.status == OperationStatus.INVALID_REFERENCE:
                skipped.append(garment_id)

        if skipped:
            logger.warning("Saved outfit references unknown garments", outfit_id=outfit_id, skipped=skipped)
        return OperationResult.ok(outfit_id, message=f"skipped: {', '.join(skipped)}" if skipped else None)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _resolve(self, item: GarmentRef) -> Garment | None:
        item_id = item.id if isinstance(item, Garment) else item
        return self._by_id.get(item_id)

    def _find_worn(self, item_id: str) -> Garment | None:
        for garment in self._worn.values():
            if garment.id == item_id:
                return garment
        return None

    def _invalid(self, item: GarmentRef, operation: str) -> OperationResult:
        item_id = item.id if isinstance(item, Garment) else item
        logger.info("Invalid garment reference", operation=operation, item_id=item_id)
        return OperationResult.failure(
            OperationStatus.INVALID_REFERENCE, item_id, f"garment {item_id!r} is not in the catalog"
        )
