"""Configuration management for the v-FIT outfit engine."""

from pathlib import Path
from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import AvatarPose, Vector3


class AvatarConfig(BaseModel):
    """Avatar asset and starting pose."""
    model_config = ConfigDict(protected_namespaces=())

    model_ref: str = "/avatar.glb"
    position: Vector3 = Field(default_factory=lambda: Vector3(x=0.0, y=-1.0, z=0.0))
    rotation: Vector3 = Field(default_factory=Vector3)

    def initial_pose(self) -> AvatarPose:
        return AvatarPose(position=self.position, rotation=self.rotation)


class RecommendationConfig(BaseModel):
    """Pairing recommendation settings."""
    limit: int = Field(default=3, ge=0)


class OutfitStoreConfig(BaseModel):
    """External save/share collaborator endpoints."""
    save_url: str | None = None  # None = log-only hand-off
    share_url: str | None = None
    timeout: float = 10.0

    @property
    def enabled(self) -> bool:
        return bool(self.save_url or self.share_url)


class VFitConfig(BaseSettings):
    """Main engine configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="VFIT_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Catalog JSON file; None = packaged demo catalog
    catalog_path: Path | None = None

    # Sub-configs
    avatar: AvatarConfig = Field(default_factory=AvatarConfig)
    recommendations: RecommendationConfig = Field(default_factory=RecommendationConfig)
    outfit_store: OutfitStoreConfig = Field(default_factory=OutfitStoreConfig)

    # Renderer pass-through
    physics_enabled: bool = False

    # Sessions
    session_ttl_seconds: int = 86400  # 24 hours

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False


def load_config() -> VFitConfig:
    """Load configuration from environment and defaults."""
    return VFitConfig()
