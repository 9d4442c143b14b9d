"""Tests for configuration and logging setup."""

import logging

from vfit.config import VFitConfig, load_config
from vfit.engine import OutfitEngine
from vfit.models import Vector3
from vfit.utils.logging import configure_logging, get_logger


class TestConfig:
    def test_defaults(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        config = load_config()

        assert config.catalog_path is None
        assert config.avatar.position == Vector3(x=0, y=-1, z=0)
        assert config.recommendations.limit == 3
        assert not config.physics_enabled
        assert not config.outfit_store.enabled

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("VFIT_PHYSICS_ENABLED", "true")
        monkeypatch.setenv("VFIT_RECOMMENDATIONS__LIMIT", "5")
        monkeypatch.setenv("VFIT_OUTFIT_STORE__SAVE_URL", "http://store.test/outfits")

        config = VFitConfig()

        assert config.physics_enabled
        assert config.recommendations.limit == 5
        assert config.outfit_store.enabled

    def test_engine_from_config(self, catalog):
        config = VFitConfig(physics_enabled=True, recommendations={"limit": 2})

        engine = OutfitEngine.from_config(config, catalog)

        assert engine.physics_enabled
        assert len(engine.recommendations_for("T1")) == 2
        assert engine.pose.position == Vector3(x=0, y=-1, z=0)

    def test_engine_from_config_uses_demo_catalog(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        engine = OutfitEngine.from_config(VFitConfig())

        assert engine.get_garment("tshirt") is not None


class TestLogging:
    def test_configure_log_level(self):
        configure_logging(log_level="WARNING")

        assert logging.getLogger().level == logging.WARNING

    def test_json_logs(self):
        configure_logging(json_logs=True, log_level="INFO")

        logger = get_logger("vfit.test")
        assert hasattr(logger, "info")
