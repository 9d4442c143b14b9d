"""Save/share hand-offs of the worn outfit to external collaborators."""

from typing import Any, Protocol

import httpx

from ..config import OutfitStoreConfig
from ..exceptions import HandOffError
from ..models import OutfitSnapshot
from ..utils.logging import get_logger

logger = get_logger(__name__)


class OutfitHandOff(Protocol):
    """Accepts outfit snapshots. Storage and sharing formats are its own business."""

    async def save(self, snapshot: OutfitSnapshot, name: str | None = None) -> dict[str, Any]: ...

    async def share(self, snapshot: OutfitSnapshot) -> dict[str, Any]: ...


class LoggingHandOff:
    """Client-only stand-in: logs the snapshot and confirms."""

    async def save(self, snapshot: OutfitSnapshot, name: str | None = None) -> dict[str, Any]:
        logger.info("Outfit saved", name=name, garment_ids=snapshot.garment_ids)
        return {"status": "accepted", "items": len(snapshot.items)}

    async def share(self, snapshot: OutfitSnapshot) -> dict[str, Any]:
        logger.info("Outfit shared", garment_ids=snapshot.garment_ids)
        return {"status": "accepted", "items": len(snapshot.items)}


class HttpOutfitHandOff:
    """Posts snapshots as JSON to configured save/share endpoints."""

    def __init__(self, config: OutfitStoreConfig, transport: httpx.AsyncBaseTransport | None = None):
        self.config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.config.timeout, transport=self._transport)
        return self._client

    async def close(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()

    async def save(self, snapshot: OutfitSnapshot, name: str | None = None) -> dict[str, Any]:
        payload = snapshot.model_dump(mode="json")
        if name is not None:
            payload["name"] = name
        return await self._post(self.config.save_url, payload, "save")

    async def share(self, snapshot: OutfitSnapshot) -> dict[str, Any]:
        return await self._post(self.config.share_url, snapshot.model_dump(mode="json"), "share")

    async def _post(self, url: str | None, payload: dict[str, Any], action: str) -> dict[str, Any]:
        if not url:
            raise HandOffError(f"No endpoint configured for outfit {action}")

        try:
            response = await self.client.post(url, json=payload)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("Outfit hand-off failed", action=action, url=url, error=str(e))
            raise HandOffError(f"Outfit {action} failed: {e}") from e

        logger.info("Outfit handed off", action=action, status_code=response.status_code)
        if not response.content:
            return {"status": "accepted"}
        try:
            return response.json()
        except ValueError:
            return {"status": "accepted", "body": response.text}


def build_hand_off(config: OutfitStoreConfig) -> OutfitHandOff:
    """HTTP hand-off when endpoints are configured, otherwise log-only."""
    if config.enabled:
        return HttpOutfitHandOff(config)
    return LoggingHandOff()
