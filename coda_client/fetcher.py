from coda_client.api import RoomApi
from coda_client.models import RoomSnapshot
from coda_client.store import RoomStateStore


class StateFetcher:
    """Pulls the authoritative room state and installs it in the store."""

    def __init__(self, api: RoomApi, store: RoomStateStore):
        self.api = api
        self.store = store

    async def refresh(self, room_id: str) -> RoomSnapshot:
        # Transport and validation errors propagate; there is no retry.
        snapshot = RoomSnapshot.model_validate(await self.api.get_room(room_id))
        self.store.replace(snapshot)
        return snapshot
