"""
Turns notifications into log lines and keeps the store fresh.

Every event triggers a refresh, whatever its kind. When an attacker card
leaves the staging area after a wrong guess or a stay, its new slot is found
by matching the card's ``unique_id`` in the attacker's hand.
"""
import logging
from typing import List, Optional

from coda_client.channel import EventChannel
from coda_client.codec import describe_card, describe_guess
from coda_client.events import (
    Attacked,
    AttackerCardChosen,
    Event,
    GameFinished,
    GameStarted,
    PlayerRegistered,
    Stayed,
    YourHand,
    YourTurn,
)
from coda_client.fetcher import StateFetcher
from coda_client.models import CardToken, PlayerHand, RoomSnapshot

logger = logging.getLogger(__name__)

NOT_FOUND = 0


def find_card_position(hand: PlayerHand, token: CardToken) -> int:
    """1-based slot of the card carrying ``token``, or 0 when it is not in ``hand``."""
    for position, entry in enumerate(hand, start=1):
        if entry.unique_id == token:
            return position
    return NOT_FOUND


def _staged(prior: Optional[RoomSnapshot]):
    """The player on turn in ``prior`` and the token of their staged card, either may be None."""
    if prior is None or prior.board is None:
        return None, None
    staged = prior.board.attacker_card
    return prior.board.current_turn, staged.unique_id if staged is not None else None


def _relocated(hands: List[PlayerHand], attacker: Optional[int], token: Optional[CardToken]) -> Optional[int]:
    if token is None or attacker is None or not 1 <= attacker <= len(hands):
        return None
    return find_card_position(hands[attacker - 1], token)


def describe(event: Event, prior: Optional[RoomSnapshot]) -> str:
    attacker, token = _staged(prior)
    if isinstance(event, PlayerRegistered):
        return f"Player {event.index} registered"
    if isinstance(event, GameStarted):
        return "The game has started"
    if isinstance(event, YourHand):
        return "Your hand: " + ", ".join(describe_card(card) for card in event.cards)
    if isinstance(event, YourTurn):
        return "It is your turn"
    if isinstance(event, Attacked):
        text = (
            f"Player {attacker or '?'} guessed that card #{event.target_hand_index} "
            f"of player {event.target_player} is {describe_guess(event.guess)}: "
        )
        if event.result:
            return text + "correct"
        text += "wrong"
        position = _relocated(event.board.hands, attacker, token)
        if position is not None:
            text += f", the attacker card went to slot {position}"
        return text
    if isinstance(event, Stayed):
        text = f"Player {attacker or '?'} stayed"
        position = _relocated(event.hands, attacker, token)
        if position is not None:
            text += f", the attacker card went to slot {position}"
        return text
    if isinstance(event, AttackerCardChosen):
        return f"Your attacker card is {describe_card(event.card)}"
    if isinstance(event, GameFinished):
        return f"Player {event.winner} won the game"
    raise TypeError(f"Not an event: {event!r}")


class EventInterpreter:
    def __init__(self, fetcher: StateFetcher):
        self.fetcher = fetcher
        self.descriptions: List[str] = []

    async def handle(self, room_id: str, event: Event) -> str:
        # Describe against the snapshot the event resolves, before it is replaced
        description = describe(event, self.fetcher.store.read())
        self.descriptions.append(description)
        await self.fetcher.refresh(room_id)
        return description

    async def run(self, room_id: str, channel: EventChannel) -> None:
        """Consume ``channel`` until it closes. A failed refresh does not stop the loop."""
        async for event in channel.events():
            try:
                await self.handle(room_id, event)
            except Exception:
                logger.exception("Refresh after %s failed", type(event).__name__)
