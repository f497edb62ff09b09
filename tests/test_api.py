import httpx
import pytest
from pydantic import ValidationError

from coda_client.__main__ import main
from coda_client.config import Settings
from coda_client.room_view import Lobby


@pytest.mark.anyio
async def test_new_room_is_empty_and_waiting(api):
    room_id = await api.create_room(2)
    assert room_id
    room = await api.get_room(room_id)
    assert room["status"] == "not_started"
    assert room["registered"] == 0
    assert room["your_index"] is None


@pytest.mark.anyio
async def test_lobby_lists_rooms_in_creation_order(api):
    lobby = Lobby(api)
    first = await lobby.create_room(2)
    second = await lobby.create_room(4)
    assert lobby.rooms == [first, second]


@pytest.mark.anyio
async def test_player_count_is_checked_before_sending(api, manager):
    with pytest.raises(ValidationError):
        await api.create_room(7)
    assert manager.rooms == {}


@pytest.mark.anyio
async def test_missing_room_raises(api):
    with pytest.raises(httpx.HTTPStatusError):
        await api.get_room("nope")


@pytest.mark.anyio
async def test_session_cookie_is_kept_for_the_websocket(api):
    room_id = await api.create_room(2)
    assert api.cookie_header() == ""
    await api.post_register(room_id)
    assert api.cookie_header().startswith("session=")


def test_websocket_url_follows_the_api_scheme():
    assert Settings(api_url="http://localhost:8080").ws_url("abc") == "ws://localhost:8080/api/v1/room/abc/ws"
    assert Settings(api_url="https://coda.example").ws_url("abc") == "wss://coda.example/api/v1/room/abc/ws"


def test_settings_read_the_environment(monkeypatch):
    monkeypatch.setenv("CODA_API_URL", "https://coda.example/")
    monkeypatch.setenv("CODA_LOG_LEVEL", "debug")
    settings = Settings.from_env()
    assert settings.api_url == "https://coda.example"
    assert settings.log_level == "DEBUG"
    assert settings.api_path("r1", "stay") == "/api/v1/room/r1/stay"


def test_command_line_rejects_unsupported_room_sizes():
    with pytest.raises(SystemExit):
        main(["create", "9"])
