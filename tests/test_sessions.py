"""Tests for the fitting session registry."""

from datetime import datetime, timedelta, timezone

import pytest

from vfit.engine import OutfitEngine
from vfit.exceptions import SessionNotFound
from vfit.services.sessions import SessionRegistry


@pytest.fixture
def registry(catalog):
    return SessionRegistry(lambda: OutfitEngine(catalog), ttl_seconds=60)


class TestSessionRegistry:
    def test_create_and_get(self, registry):
        session = registry.create()

        assert registry.get(session.session_id) is session
        assert len(registry) == 1

    def test_sessions_have_separate_engines(self, registry):
        first = registry.create()
        second = registry.create()

        first.engine.wear("T1")

        assert second.engine.worn == {}

    def test_unknown_session(self, registry):
        with pytest.raises(SessionNotFound):
            registry.get("missing")

    def test_expired_session_is_dropped(self, registry):
        session = registry.create()
        session.updated_at = datetime.now(timezone.utc) - timedelta(seconds=120)

        with pytest.raises(SessionNotFound):
            registry.get(session.session_id)
        assert len(registry) == 0

    def test_cleanup_expired(self, registry):
        stale = registry.create()
        registry.create()
        stale.updated_at = datetime.now(timezone.utc) - timedelta(seconds=120)

        assert registry.cleanup_expired() == 1
        assert len(registry) == 1

    def test_create_drops_abandoned_sessions(self, registry):
        """Sessions nobody reads again are evicted once a new one is created."""
        abandoned = [registry.create() for _ in range(50)]
        for session in abandoned:
            session.updated_at = datetime.now(timezone.utc) - timedelta(seconds=120)

        fresh = [registry.create() for _ in range(5)]

        assert len(registry) == 5
        assert all(registry.get(s.session_id) is s for s in fresh)

    def test_timestamps_are_timezone_aware(self, registry):
        session = registry.create()

        assert session.created_at.tzinfo is not None
        assert session.updated_at.utcoffset() == timedelta(0)
        assert not session.is_expired()

    def test_delete(self, registry):
        session = registry.create()

        assert registry.delete(session.session_id)
        assert not registry.delete(session.session_id)
