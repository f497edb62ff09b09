"""
Local mirror of the room state.

Whoever calls ``replace`` last wins: there is no version check, so a slow
refresh that finishes after a fast one leaves the older snapshot in place.
"""
import logging
from typing import Callable, List, Optional

from coda_client.models import RoomSnapshot

logger = logging.getLogger(__name__)

Subscriber = Callable[[Optional[RoomSnapshot]], None]


class RoomStateStore:
    def __init__(self):
        self._snapshot: Optional[RoomSnapshot] = None
        self._subscribers: List[Subscriber] = []

    def read(self) -> Optional[RoomSnapshot]:
        return self._snapshot

    def replace(self, snapshot: RoomSnapshot) -> None:
        self._snapshot = snapshot
        self._notify()

    def clear(self) -> None:
        """Forget the snapshot when the room view goes away."""
        self._snapshot = None
        self._notify()

    def subscribe(self, callback: Subscriber) -> None:
        self._subscribers.append(callback)

    def unsubscribe(self, callback: Subscriber) -> None:
        self._subscribers = [cb for cb in self._subscribers if cb != callback]

    def _notify(self) -> None:
        for callback in list(self._subscribers):
            try:
                callback(self._snapshot)
            except Exception:
                logger.exception("Store subscriber %r failed", callback)
