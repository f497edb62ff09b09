"""
Per-room orchestration: one store, one fetcher, one notification channel.

Entering a room opens the channel before anything else, so no event that
happens after the first fetch is missed. Leaving (or entering another room)
always releases the connection and the listener task.
"""
import asyncio
import json
import logging
from typing import Any, List, Optional

from coda_client import gate
from coda_client.actions import ActionSubmitter
from coda_client.api import RoomApi
from coda_client.channel import EventChannel
from coda_client.fetcher import StateFetcher
from coda_client.interpreter import EventInterpreter
from coda_client.models import RoomSnapshot
from coda_client.store import RoomStateStore

logger = logging.getLogger(__name__)


class RoomView:
    def __init__(self, api: RoomApi, channel: Optional[EventChannel] = None):
        self.api = api
        self.store = RoomStateStore()
        self.fetcher = StateFetcher(api, self.store)
        self.channel = channel or EventChannel(api.settings)
        self.interpreter = EventInterpreter(self.fetcher)
        self.submitter = ActionSubmitter(api)
        self.room_id: Optional[str] = None
        self.can_register = False
        self._listener: Optional[asyncio.Task] = None

    async def __aenter__(self) -> "RoomView":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def enter(self, room_id: str) -> RoomSnapshot:
        await self._stop_listener()
        self.room_id = room_id
        self.can_register = False
        self.store.clear()
        await self.channel.open(room_id, cookie=self.api.cookie_header())
        self._listener = asyncio.create_task(self.interpreter.run(room_id, self.channel))
        try:
            snapshot = await self.fetcher.refresh(room_id)
        except Exception:
            await self.close()
            raise
        self.can_register = gate.can_register(snapshot)
        return snapshot

    async def wait_closed(self) -> None:
        """Block until the server closes the notification connection."""
        if self._listener is not None:
            await self._listener

    async def close(self) -> None:
        await self._stop_listener()
        await self.channel.close()
        self.store.clear()
        self.room_id = None
        self.can_register = False

    async def _stop_listener(self) -> None:
        listener, self._listener = self._listener, None
        if listener is None:
            return
        listener.cancel()
        try:
            await listener
        except asyncio.CancelledError:
            pass
        except Exception:
            logger.exception("Listener for room %s had stopped with an error", self.room_id)

    @property
    def snapshot(self) -> Optional[RoomSnapshot]:
        return self.store.read()

    @property
    def descriptions(self) -> List[str]:
        return self.interpreter.descriptions

    @property
    def can_attack(self) -> bool:
        return gate.can_attack(self.snapshot)

    @property
    def can_stay(self) -> bool:
        return gate.can_stay(self.snapshot)

    @property
    def has_finished(self) -> bool:
        return gate.has_finished(self.snapshot)

    async def on_register(self) -> bool:
        if not await self.submitter.register(self.room_id):
            return False
        self.can_register = False
        await self.fetcher.refresh(self.room_id)
        return True

    async def on_attack(self, raw_player: Any, raw_hand_index: Any, raw_guess: Any) -> bool:
        if not await self.submitter.attack_from_input(self.room_id, raw_player, raw_hand_index, raw_guess):
            return False
        await self.fetcher.refresh(self.room_id)
        return True

    async def on_stay(self) -> bool:
        if not await self.submitter.stay(self.room_id):
            return False
        await self.fetcher.refresh(self.room_id)
        return True

    def render(self) -> str:
        snapshot = self.snapshot
        if snapshot is None:
            return "{}"
        return json.dumps(snapshot.model_dump(mode="json"), indent=2)


class Lobby:
    """Rooms created from this client, in creation order."""

    def __init__(self, api: RoomApi):
        self.api = api
        self.rooms: List[str] = []

    async def create_room(self, num_players: int) -> str:
        room_id = await self.api.create_room(num_players)
        self.rooms.append(room_id)
        return room_id
