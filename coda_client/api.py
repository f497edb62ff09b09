"""
REST transport for the room endpoints.

One ``httpx.AsyncClient`` per player: its cookie jar carries the session the
server hands out on registration, so every later request is credentialed.
No timeout is applied; a hung request simply never returns.
"""
import logging
from typing import Any, Dict, Optional

import httpx

from coda_client.config import Settings
from coda_client.models import AttackRequest, CreateRoomRequest, CreateRoomResponse

logger = logging.getLogger(__name__)


class RoomApi:
    def __init__(self, settings: Optional[Settings] = None, client: Optional[httpx.AsyncClient] = None):
        self.settings = settings or Settings.from_env()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=self.settings.api_url, timeout=None)

    async def __aenter__(self) -> "RoomApi":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def cookie_header(self) -> str:
        """The jar rendered as a ``Cookie`` header, for the websocket upgrade."""
        return "; ".join(f"{name}={value}" for name, value in self._client.cookies.items())

    async def create_room(self, num_players: int) -> str:
        request = CreateRoomRequest(num_players=num_players)
        response = await self._client.post(self.settings.api_path(), json=request.model_dump())
        response.raise_for_status()
        room_id = CreateRoomResponse.model_validate(response.json()).roomid
        logger.info("Created room %s for %d players", room_id, num_players)
        return room_id

    async def get_room(self, room_id: str) -> Dict[str, Any]:
        response = await self._client.get(self.settings.api_path(room_id))
        response.raise_for_status()
        return response.json()

    async def post_register(self, room_id: str) -> httpx.Response:
        return await self._client.post(self.settings.api_path(room_id, "register"))

    async def post_attack(self, room_id: str, request: AttackRequest) -> httpx.Response:
        return await self._client.post(self.settings.api_path(room_id, "attack"), json=request.model_dump())

    async def post_stay(self, room_id: str) -> httpx.Response:
        return await self._client.post(self.settings.api_path(room_id, "stay"))
