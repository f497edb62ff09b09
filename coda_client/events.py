"""
Push notifications from ``/api/v1/room/{roomid}/ws``.

Every frame is a JSON pair ``[event_name, payload]``. Each event name maps to one
model below; payload-less events ignore whatever payload arrives.
"""
import json
import logging
from typing import Any, Dict, List, Optional, Type, Union

from pydantic import BaseModel, ValidationError

from coda_client.models import BoardSnapshot, CardId, PlayerHand

logger = logging.getLogger(__name__)


class EventParseError(ValueError):
    """A frame that is not a valid ``[event_name, payload]`` pair."""


class PlayerRegistered(BaseModel):
    index: int


class GameStarted(BaseModel):
    pass


class YourHand(BaseModel):
    cards: List[CardId]


class YourTurn(BaseModel):
    pass


class Attacked(BaseModel):
    result: bool
    target_player: int
    target_hand_index: int
    guess: CardId
    board: BoardSnapshot


class Stayed(BaseModel):
    hands: List[PlayerHand]


class AttackerCardChosen(BaseModel):
    card: CardId


class GameFinished(BaseModel):
    winner: int


Event = Union[
    PlayerRegistered,
    GameStarted,
    YourHand,
    YourTurn,
    Attacked,
    Stayed,
    AttackerCardChosen,
    GameFinished,
]

EVENT_TYPES: Dict[str, Type[BaseModel]] = {
    "player_registered": PlayerRegistered,
    "game_started": GameStarted,
    "your_hand": YourHand,
    "your_turn": YourTurn,
    "attacked": Attacked,
    "stayed": Stayed,
    "attacker_card_chosen": AttackerCardChosen,
    "game_finished": GameFinished,
}

_EMPTY_PAYLOAD = (GameStarted, YourTurn)


def parse_event(name: str, payload: Any) -> Optional[Event]:
    """Build the event for ``name``. Unknown names are logged and give None."""
    event_type = EVENT_TYPES.get(name)
    if event_type is None:
        logger.warning("Ignoring unknown event %r", name)
        return None
    if event_type in _EMPTY_PAYLOAD:
        return event_type()
    try:
        return event_type.model_validate(payload)
    except ValidationError as e:
        raise EventParseError(f"Bad payload for {name!r}: {e}") from e


def parse_frame(raw: Union[str, bytes]) -> Optional[Event]:
    try:
        message = json.loads(raw)
    except json.JSONDecodeError as e:
        raise EventParseError(f"Frame is not JSON: {e}") from e
    if not isinstance(message, list) or len(message) != 2 or not isinstance(message[0], str):
        raise EventParseError(f"Frame is not an [event, payload] pair: {message!r}")
    name, payload = message
    return parse_event(name, payload)
