"""
Client settings, read from the environment.

``CODA_API_URL`` points at the game server (default ``http://localhost:8080``);
the websocket scheme follows it (``http`` -> ``ws``, ``https`` -> ``wss``).
"""
import logging
import os

from pydantic import BaseModel

DEFAULT_API_URL = "http://localhost:8080"
API_PREFIX = "/api/v1/room"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class Settings(BaseModel):
    api_url: str = DEFAULT_API_URL
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            api_url=os.environ.get("CODA_API_URL", DEFAULT_API_URL).rstrip("/"),
            log_level=os.environ.get("CODA_LOG_LEVEL", "INFO").upper(),
        )

    def api_path(self, room_id: str = "", action: str = "") -> str:
        path = API_PREFIX
        if room_id:
            path += f"/{room_id}"
        if action:
            path += f"/{action}"
        return path

    def ws_url(self, room_id: str) -> str:
        if self.api_url.startswith("https://"):
            base = "wss://" + self.api_url[len("https://"):]
        elif self.api_url.startswith("http://"):
            base = "ws://" + self.api_url[len("http://"):]
        else:
            base = self.api_url
        return base + self.api_path(room_id, "ws")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
