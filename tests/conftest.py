import httpx
import pytest

from coda_client.api import RoomApi
from coda_client.config import Settings
from fake_server import create_app
from fake_ws import FakeConnector


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def settings():
    return Settings(api_url="http://testserver")


@pytest.fixture
def fake_app():
    return create_app()


@pytest.fixture
def manager(fake_app):
    return fake_app.state.manager


@pytest.fixture
def make_api(fake_app, settings):
    """One RoomApi per simulated player, each with its own cookie jar."""
    def factory() -> RoomApi:
        client = httpx.AsyncClient(transport=httpx.ASGITransport(app=fake_app), base_url=settings.api_url)
        return RoomApi(settings, client=client)
    return factory


@pytest.fixture
def api(make_api):
    return make_api()


@pytest.fixture
def connector():
    return FakeConnector()
