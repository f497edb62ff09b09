"""Scripted stand-ins for ``websockets.connect`` and its connections."""
import asyncio
import json
from typing import Any, List, Optional

from websockets.exceptions import ConnectionClosedError, ConnectionClosedOK
from websockets.frames import Close


def frame(name: str, payload: Any = None) -> str:
    return json.dumps([name, payload])


class FakeConnection:
    def __init__(self, url: str, headers: Optional[dict] = None, frames: Optional[List[str]] = None):
        self.url = url
        self.headers = headers
        self.frames: List[str] = list(frames or [])
        self.closed = False
        self.hangup_code: Optional[int] = None
        self._wakeup = asyncio.Event()

    def push(self, *frames: str) -> None:
        self.frames.extend(frames)
        self._wakeup.set()

    def hang_up(self, code: int = 1000) -> None:
        """The server closes the connection once queued frames are read."""
        self.hangup_code = code
        self._wakeup.set()

    async def recv(self) -> str:
        while True:
            if self.closed:
                raise ConnectionClosedOK(None, Close(1000, ""))
            if self.frames:
                return self.frames.pop(0)
            if self.hangup_code is not None:
                close = Close(self.hangup_code, "")
                if self.hangup_code == 1000:
                    raise ConnectionClosedOK(close, None)
                raise ConnectionClosedError(close, None)
            self._wakeup.clear()
            await self._wakeup.wait()

    async def close(self) -> None:
        self.closed = True
        self._wakeup.set()


class FakeConnector:
    """Callable in place of ``websockets.connect``; remembers every connection it made."""

    def __init__(self):
        self.connections: List[FakeConnection] = []
        self.scripted: List[List[str]] = []

    async def __call__(self, url: str, additional_headers: Optional[dict] = None) -> FakeConnection:
        frames = self.scripted.pop(0) if self.scripted else []
        connection = FakeConnection(url, additional_headers, frames)
        self.connections.append(connection)
        return connection

    @property
    def last(self) -> FakeConnection:
        return self.connections[-1]
