"""Data models for the v-FIT outfit engine."""

from .garment import Category, Vector3, LocalOffset, PhysicsHints, Garment, SavedOutfit
from .scene import AvatarPose, WorldTransform, RenderInstruction, EngineState
from .outfit import OperationStatus, OperationResult, SnapshotEntry, OutfitSnapshot

__all__ = [
    "Category",
    "Vector3",
    "LocalOffset",
    "PhysicsHints",
    "Garment",
    "SavedOutfit",
    "AvatarPose",
    "WorldTransform",
    "RenderInstruction",
    "EngineState",
    "OperationStatus",
    "OperationResult",
    "SnapshotEntry",
    "OutfitSnapshot",
]
