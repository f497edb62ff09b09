"""
Room and board snapshots as served by ``GET /api/v1/room/{roomid}``.

A snapshot is always replaced wholesale; nothing here merges fields.
"""
from enum import Enum
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, Field, model_validator
from pydantic_core import core_schema

from coda_client.codec import NUM_CODES, Color


class GameStatus(str, Enum):
    NOT_STARTED = "not_started"
    PLAYING = "playing"


class CardToken:
    """Opaque handle for one physical card. Supports equality and hashing only."""

    __slots__ = ("_value",)

    def __init__(self, value: Any):
        self._value = value

    @property
    def value(self) -> Any:
        return self._value

    def __eq__(self, other):
        if not isinstance(other, CardToken):
            return NotImplemented
        return self._value == other._value

    def __hash__(self):
        return hash(self._value)

    def __repr__(self):
        return f"CardToken({self._value!r})"

    @classmethod
    def _validate(cls, value: Any) -> "CardToken":
        if isinstance(value, cls):
            return value
        if isinstance(value, bool) or not isinstance(value, (str, int)):
            raise ValueError("unique_id must be a string or an integer")
        return cls(value)

    @classmethod
    def __get_pydantic_core_schema__(cls, source, handler):
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(lambda token: token.value),
        )


def _coerce_color(value: Any) -> Any:
    # The server may send the raw parity bit instead of the name
    if isinstance(value, int) and not isinstance(value, bool):
        return Color.BLACK if value % 2 == 0 else Color.WHITE
    return value


CardColor = Annotated[Color, BeforeValidator(_coerce_color)]
CardId = Annotated[int, Field(ge=0, lt=NUM_CODES)]


class CardColorOnly(BaseModel):
    color: CardColor


class AttackerCard(BaseModel):
    """The staged card. ``full_card`` is only filled in for its owner."""
    color: CardColor
    full_card: Optional[CardId] = None
    unique_id: CardToken


class CardEntry(BaseModel):
    card_id: CardId
    hidden: bool
    unique_id: CardToken


PlayerHand = List[CardEntry]


class BoardSnapshot(BaseModel):
    num_players: int
    current_turn: Optional[int] = None
    your_player_index: Optional[int] = None
    attacker_card: Optional[AttackerCard] = None  # None while no card is staged
    deck_top: Optional[CardColorOnly] = None
    can_stay: bool = False
    winner: Optional[int] = None
    hands: List[PlayerHand] = []
    your_hand: Optional[List[CardId]] = None
    your_attacker_card_from_deck: Optional[CardId] = None

    @model_validator(mode="after")
    def _check_hands(self) -> "BoardSnapshot":
        if len(self.hands) != self.num_players:
            raise ValueError(f"expected {self.num_players} hands, got {len(self.hands)}")
        if self.your_player_index is not None and not 1 <= self.your_player_index <= len(self.hands):
            raise ValueError(f"your_player_index {self.your_player_index} is not a player")
        return self

    def hand_of(self, player: int) -> PlayerHand:
        """Hand of a 1-based player number."""
        return self.hands[player - 1]


class RoomSnapshot(BaseModel):
    status: GameStatus
    num_players: int
    registered: int = 0
    your_index: Optional[int] = None
    board: Optional[BoardSnapshot] = None

    @model_validator(mode="after")
    def _check_room(self) -> "RoomSnapshot":
        if self.registered > self.num_players:
            raise ValueError(f"{self.registered} players registered in a room for {self.num_players}")
        if self.board is not None and self.board.winner is not None and self.status != GameStatus.PLAYING:
            raise ValueError("a winner was reported for a room that is not playing")
        return self


class CreateRoomRequest(BaseModel):
    num_players: int = Field(2, ge=2, le=4)


class CreateRoomResponse(BaseModel):
    roomid: str = Field(min_length=1)


class AttackRequest(BaseModel):
    target_player: int
    target_hand_index: int
    guess: int
