"""
Coda room client.

Keeps a local mirror of a game room in sync with the server through REST
refreshes and websocket notifications, and submits the player's moves.
"""
from coda_client.api import RoomApi
from coda_client.config import Settings
from coda_client.room_view import Lobby, RoomView

__all__ = ["Lobby", "RoomApi", "RoomView", "Settings"]
