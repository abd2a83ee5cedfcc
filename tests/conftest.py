import json

import httpx
import pytest
from fastapi.testclient import TestClient

from main import create_app
from services.config import FunctionsConfig

BASE_URL = "https://demo-project.supabase.co"
ANON_KEY = "anon-key-123456"


class FakeFunctions:
    """Stand-in for the remote functions, served through httpx.MockTransport.

    Each function answers 200 {} until told otherwise with respond() or fail().
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._handlers = {}
        self.on_request = None

    def respond(self, name: str, status: int = 200, **kwargs):
        self._handlers[name] = lambda request: httpx.Response(status, **kwargs)

    def route(self, name: str, handler):
        self._handlers[name] = handler

    def fail(self, name: str, make_error):
        def handler(request):
            raise make_error(request)

        self.route(name, handler)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.on_request:
            self.on_request(request)
        name = request.url.path.rsplit("/", 1)[-1]
        handler = self._handlers.get(name, lambda r: httpx.Response(200, json={}))
        return handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def payload(self, index: int = -1) -> dict:
        return json.loads(self.requests[index].content)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def config():
    return FunctionsConfig(base_url=BASE_URL, anon_key=ANON_KEY)


@pytest.fixture
def functions():
    return FakeFunctions()


@pytest.fixture
def client(config, functions):
    app = create_app(config=config, transport=functions.transport)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def form(client):
    return client.app.state.form
