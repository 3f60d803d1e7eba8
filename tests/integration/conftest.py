from collections.abc import Callable, Iterator

import httpx
import pytest
from fastapi.testclient import TestClient
from kiro_proxy.core.app import build_app
from kiro_proxy.core.config.app_config import AppConfig

Handler = Callable[[httpx.Request], httpx.Response]


class RecordingBackend:
    """Mock Kiro backend that records every request it receives."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.handler: Handler = lambda request: httpx.Response(
            200, json={"message": "ok"}
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)


@pytest.fixture
def backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture
def make_client(backend: RecordingBackend) -> Iterator[Callable[[AppConfig], TestClient]]:
    clients: list[TestClient] = []

    def factory(config: AppConfig) -> TestClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(backend))
        client = TestClient(build_app(config, client=http_client))
        client.__enter__()
        clients.append(client)
        return client

    yield factory
    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client, app_config: AppConfig) -> TestClient:
    return make_client(app_config)
