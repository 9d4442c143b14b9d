"""Operation results and outfit snapshots."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field


class OperationStatus(str, Enum):
    """Outcome of an engine operation."""

    OK = "ok"
    NOOP = "noop"  # idempotent repeat, not an error
    INVALID_REFERENCE = "invalid_reference"
    NOT_WORN = "not_worn"
    NOT_STAGED = "not_staged"


class OperationResult(BaseModel):
    """Result of a mutating engine call. State is unchanged unless status is OK."""

    model_config = ConfigDict(frozen=True)

    status: OperationStatus
    item_id: str | None = None
    message: str | None = None
    evicted_id: str | None = Field(default=None, description="Garment moved back to staging by a wear")

    @computed_field
    @property
    def success(self) -> bool:
        return self.status in (OperationStatus.OK, OperationStatus.NOOP)

    @classmethod
    def ok(cls, item_id: str | None = None, **kwargs) -> "OperationResult":
        return cls(status=OperationStatus.OK, item_id=item_id, **kwargs)

    @classmethod
    def noop(cls, item_id: str | None, message: str) -> "OperationResult":
        return cls(status=OperationStatus.NOOP, item_id=item_id, message=message)

    @classmethod
    def failure(cls, status: OperationStatus, item_id: str | None, message: str) -> "OperationResult":
        return cls(status=status, item_id=item_id, message=message)


class SnapshotEntry(BaseModel):
    """A worn garment as handed to save/share collaborators."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str


class OutfitSnapshot(BaseModel):
    """Serializable copy of the worn outfit."""

    model_config = ConfigDict(frozen=True)

    items: list[SnapshotEntry] = Field(default_factory=list)
    taken_at: datetime = Field(default_factory=datetime.now)

    @property
    def garment_ids(self) -> list[str]:
        return [entry.id for entry in self.items]

    @property
    def is_empty(self) -> bool:
        return not self.items
