"""Tests for save/share hand-offs."""

import json

import httpx
import pytest

from vfit.config import OutfitStoreConfig
from vfit.exceptions import HandOffError
from vfit.models import OutfitSnapshot, SnapshotEntry
from vfit.services import HttpOutfitHandOff, LoggingHandOff, build_hand_off


@pytest.fixture
def snapshot():
    return OutfitSnapshot(items=[
        SnapshotEntry(id="T1", name="Classic T-Shirt"),
        SnapshotEntry(id="B1", name="Black Jeans"),
    ])


class TestBuildHandOff:
    def test_log_only_without_endpoints(self):
        assert isinstance(build_hand_off(OutfitStoreConfig()), LoggingHandOff)

    def test_http_with_endpoint(self):
        config = OutfitStoreConfig(save_url="http://store.test/outfits")

        assert isinstance(build_hand_off(config), HttpOutfitHandOff)


class TestLoggingHandOff:
    @pytest.mark.asyncio
    async def test_save_confirms(self, snapshot):
        result = await LoggingHandOff().save(snapshot, name="Weekend")

        assert result == {"status": "accepted", "items": 2}

    @pytest.mark.asyncio
    async def test_share_confirms(self, snapshot):
        result = await LoggingHandOff().share(snapshot)

        assert result["status"] == "accepted"


class TestHttpOutfitHandOff:
    """Tests for the HTTP hand-off using a mock transport."""

    @pytest.mark.asyncio
    async def test_save_posts_snapshot(self, snapshot):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(201, json={"id": "saved-1"})

        config = OutfitStoreConfig(save_url="http://store.test/outfits")
        hand_off = HttpOutfitHandOff(config, transport=httpx.MockTransport(handler))

        result = await hand_off.save(snapshot, name="Weekend")
        await hand_off.close()

        assert result == {"id": "saved-1"}
        assert seen["url"] == "http://store.test/outfits"
        assert seen["body"]["name"] == "Weekend"
        assert [item["id"] for item in seen["body"]["items"]] == ["T1", "B1"]

    @pytest.mark.asyncio
    async def test_empty_response_body(self, snapshot):
        transport = httpx.MockTransport(lambda request: httpx.Response(204))
        config = OutfitStoreConfig(share_url="http://store.test/share")
        hand_off = HttpOutfitHandOff(config, transport=transport)

        assert await hand_off.share(snapshot) == {"status": "accepted"}

    @pytest.mark.asyncio
    async def test_server_error_raises(self, snapshot):
        transport = httpx.MockTransport(lambda request: httpx.Response(500))
        config = OutfitStoreConfig(save_url="http://store.test/outfits")
        hand_off = HttpOutfitHandOff(config, transport=transport)

        with pytest.raises(HandOffError):
            await hand_off.save(snapshot)

    @pytest.mark.asyncio
    async def test_missing_endpoint_raises(self, snapshot):
        hand_off = HttpOutfitHandOff(OutfitStoreConfig(save_url="http://store.test/outfits"))

        with pytest.raises(HandOffError):
            await hand_off.share(snapshot)
