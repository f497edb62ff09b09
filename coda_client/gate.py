"""Which actions the viewing player may take, derived from a snapshot alone."""
from typing import Optional

from coda_client.models import GameStatus, RoomSnapshot


def _playing(snapshot: Optional[RoomSnapshot]) -> bool:
    return snapshot is not None and snapshot.status == GameStatus.PLAYING and snapshot.board is not None


def has_finished(snapshot: Optional[RoomSnapshot]) -> bool:
    return _playing(snapshot) and snapshot.board.winner is not None


def can_attack(snapshot: Optional[RoomSnapshot]) -> bool:
    if not _playing(snapshot) or has_finished(snapshot):
        return False
    board = snapshot.board
    return board.current_turn == board.your_player_index and board.attacker_card is not None


def can_stay(snapshot: Optional[RoomSnapshot]) -> bool:
    return can_attack(snapshot) and snapshot.board.can_stay


def can_register(initial: Optional[RoomSnapshot]) -> bool:
    """
    Evaluated once, on the first snapshot fetched for a room.

    A started game (a turn is set) or a room where we already hold a seat
    (``your_index`` is set) cannot be joined.
    """
    if initial is None:
        return False
    if initial.status == GameStatus.PLAYING:
        return initial.board is None or initial.board.current_turn is None
    return initial.your_index is None
