"""
Player commands: register, attack and stay.

A command succeeds when the request completes without a transport error.
The HTTP status is not part of the outcome; a rejected command counts as
sent and is only logged. Callers refresh the room state after a success.
"""
import logging
import re
from typing import Any, Optional

import httpx

from coda_client.api import RoomApi
from coda_client.models import AttackRequest

logger = logging.getLogger(__name__)

DEFAULT_TARGET_PLAYER = 1
DEFAULT_TARGET_HAND_INDEX = 1
DEFAULT_GUESS = 0

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_number(raw: Any, default: int) -> int:
    """
    Read a number typed by the player.

    Leading digits are taken ("3rd" is 3); anything unreadable, and zero,
    falls back to ``default``. Input is never rejected.
    """
    if isinstance(raw, int) and not isinstance(raw, bool):
        value: Optional[int] = raw
    elif isinstance(raw, str):
        match = _LEADING_INT.match(raw)
        try:
            value = int(match.group(1)) if match else None
        except ValueError:
            # Too many digits to convert
            value = None
    else:
        value = None
    return value or default


class ActionSubmitter:
    def __init__(self, api: RoomApi):
        self.api = api

    async def register(self, room_id: str) -> bool:
        return await self._send("register", self.api.post_register(room_id))

    async def attack(self, room_id: str, target_player: int, target_hand_index: int, guess: int) -> bool:
        request = AttackRequest(target_player=target_player, target_hand_index=target_hand_index, guess=guess)
        return await self._send("attack", self.api.post_attack(room_id, request))

    async def attack_from_input(self, room_id: str, raw_player: Any, raw_hand_index: Any, raw_guess: Any) -> bool:
        return await self.attack(
            room_id,
            parse_number(raw_player, DEFAULT_TARGET_PLAYER),
            parse_number(raw_hand_index, DEFAULT_TARGET_HAND_INDEX),
            parse_number(raw_guess, DEFAULT_GUESS),
        )

    async def stay(self, room_id: str) -> bool:
        return await self._send("stay", self.api.post_stay(room_id))

    async def _send(self, action: str, request) -> bool:
        try:
            response: httpx.Response = await request
        except httpx.TransportError as e:
            logger.warning("%s failed: %s", action, e)
            return False
        if response.is_error:
            logger.warning("%s answered with HTTP %d: %s", action, response.status_code, response.text)
        return True
