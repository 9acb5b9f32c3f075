import base64

import httpx
import pytest
from fastapi.testclient import TestClient

from zoom_notify.client import get_http_client
from zoom_notify.config import Settings, get_settings
from zoom_notify.main import app

ACCOUNT_ID = "test-account-id"
CLIENT_ID = "test-client-id"
CLIENT_SECRET = "test-client-secret"
ACCESS_TOKEN = "test-access-token-123"

OAUTH_URL = "https://zoom.us/oauth/token"
MESSAGES_URL = "https://api.zoom.us/v2/chat/users/me/messages"

BASIC_AUTH = "Basic " + base64.b64encode(f"{CLIENT_ID}:{CLIENT_SECRET}".encode()).decode()


def _without_query(url: httpx.URL) -> str:
    return f"{url.scheme}://{url.host}{url.path}"


class FakeZoom:
    """httpx MockTransport handler that records requests and replays canned responses."""

    def __init__(self):
        self.routes = {}
        self.requests = []
        self.on("POST", OAUTH_URL, json={"access_token": ACCESS_TOKEN, "expires_in": 3600})

    def on(self, method, url, status=200, json=None, text=None, headers=None):
        self.routes[(method, url)] = (status, json, text, headers)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, _without_query(request.url))
        if key not in self.routes:
            return httpx.Response(500, text=f"unexpected request {key}")
        status, json, text, headers = self.routes[key]
        if json is not None:
            return httpx.Response(status, json=json, headers=headers)
        return httpx.Response(status, text=text or "", headers=headers)

    def calls_to(self, url):
        return [r for r in self.requests if _without_query(r.url) == url]


def make_settings(**overrides) -> Settings:
    values = {
        "zoom_account_id": ACCOUNT_ID,
        "zoom_client_id": CLIENT_ID,
        "zoom_client_secret": CLIENT_SECRET,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def zoom():
    return FakeZoom()


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def client(zoom, settings):
    async def _http_client():
        async with httpx.AsyncClient(transport=httpx.MockTransport(zoom)) as http_client:
            yield http_client

    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_http_client] = _http_client
    yield TestClient(app)
    app.dependency_overrides.clear()
