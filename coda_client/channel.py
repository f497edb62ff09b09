"""
Live notification connection for the room on display.

At most one connection is open per channel. Each ``open`` bumps an epoch;
a reader or close handler belonging to an older epoch stops without touching
anything, so a late close from the previous room cannot clobber the new one.
Nothing reconnects after the server hangs up.
"""
import logging
from typing import AsyncIterator, Callable, Optional

import websockets
from websockets.exceptions import ConnectionClosed

from coda_client.config import Settings
from coda_client.events import Event, EventParseError, parse_frame

logger = logging.getLogger(__name__)

ABNORMAL_CLOSURE = 1006


class EventChannel:
    def __init__(self, settings: Settings, connect: Callable = websockets.connect):
        self.settings = settings
        self._connect = connect
        self._connection = None
        self._epoch = 0
        self.room_id: Optional[str] = None

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def is_open(self) -> bool:
        return self._connection is not None

    def is_current(self, epoch: int) -> bool:
        return epoch == self._epoch

    async def open(self, room_id: str, cookie: str = "") -> int:
        """Replace whatever connection is open with one for ``room_id``."""
        self._epoch += 1
        epoch = self._epoch
        await self._close_connection()

        headers = {"Cookie": cookie} if cookie else None
        connection = await self._connect(self.settings.ws_url(room_id), additional_headers=headers)
        if not self.is_current(epoch):
            # Another open or close won while we were connecting
            await connection.close()
            return epoch
        self._connection = connection
        self.room_id = room_id
        logger.info("Listening to room %s (epoch %d)", room_id, epoch)
        return epoch

    async def close(self) -> None:
        self._epoch += 1
        self.room_id = None
        await self._close_connection()

    async def events(self) -> AsyncIterator[Event]:
        """Events of the current connection, until either side closes it."""
        connection, epoch = self._connection, self._epoch
        if connection is None:
            return
        while True:
            try:
                raw = await connection.recv()
            except ConnectionClosed as e:
                if self.is_current(epoch):
                    code = e.rcvd.code if e.rcvd is not None else ABNORMAL_CLOSURE
                    logger.info("ws closed %d", code)
                    self._connection = None
                return
            if not self.is_current(epoch):
                return
            try:
                event = parse_frame(raw)
            except EventParseError:
                # One bad frame does not end the stream
                logger.exception("Dropping frame from room %s", self.room_id)
                continue
            if event is not None:
                yield event

    async def _close_connection(self) -> None:
        connection, self._connection = self._connection, None
        if connection is not None:
            await connection.close()
