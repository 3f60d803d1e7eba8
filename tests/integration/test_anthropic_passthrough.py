import json
import re

import httpx
import pytest
from kiro_proxy.core.config.app_config import AppConfig

from tests.conftest import TEST_BACKEND_URL

MESSAGES_BODY = {
    "model": "claude-3-7-sonnet-20250219",
    "max_tokens": 128,
    "messages": [{"role": "user", "content": "hello"}],
}


@pytest.fixture
def keyed_client(make_client):
    config = AppConfig.model_validate(
        {"backend": {"api_url": TEST_BACKEND_URL, "api_key": "configured-key"}}
    )
    return make_client(config)


@pytest.mark.parametrize("path", ["/anthropic/v1/messages", "/anthropic"])
def test_body_and_status_are_relayed_verbatim(keyed_client, backend, path) -> None:
    upstream = b'{"id":"msg_1","type":"message","content":[{"type":"text","text":"hi"}]}'
    backend.handler = lambda request: httpx.Response(201, content=upstream)
    raw_body = json.dumps(MESSAGES_BODY).encode()

    response = keyed_client.post(
        path, content=raw_body, headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 201
    assert response.content == upstream

    sent = backend.requests[0]
    assert sent.content == raw_body
    assert sent.headers["Authorization"] == "Bearer configured-key"
    assert sent.headers["User-Agent"] == "Kiro2API-AnthropicProxy/1.0"
    assert sent.headers["X-Amz-Target"].endswith("GenerateAssistantResponse")
    assert re.fullmatch(r"\d{8}T\d{6}Z", sent.headers["X-Amz-Date"])


def test_request_token_overrides_configured_key(keyed_client, backend) -> None:
    keyed_client.post(
        "/anthropic/v1/messages",
        json=MESSAGES_BODY,
        headers={"Authorization": "Bearer caller-key"},
    )

    assert backend.requests[0].headers["Authorization"] == "Bearer caller-key"


def test_upstream_errors_are_not_rewritten(keyed_client, backend) -> None:
    backend.handler = lambda request: httpx.Response(
        400, json={"type": "error", "error": {"type": "invalid_request_error"}}
    )

    response = keyed_client.post("/anthropic/v1/messages", json=MESSAGES_BODY)

    assert response.status_code == 400
    assert response.json()["type"] == "error"


def test_missing_api_key(client, backend) -> None:
    response = client.post("/anthropic/v1/messages", json=MESSAGES_BODY)

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "missing_api_key"
    assert backend.requests == []


def test_unreachable_backend_is_502(keyed_client, backend) -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    backend.handler = refuse

    response = keyed_client.post("/anthropic/v1/messages", json=MESSAGES_BODY)

    assert response.status_code == 502
    assert response.json()["error"]["code"] == "backend_unreachable"


def test_malformed_json_is_rejected(keyed_client, backend) -> None:
    response = keyed_client.post(
        "/anthropic/v1/messages",
        content=b"nope",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "invalid_json"
    assert backend.requests == []


def test_passthrough_health(client) -> None:
    response = client.get("/anthropic/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "healthy",
        "service": "kiro2api-anthropic-proxy",
    }


def test_non_ascii_api_key_is_rejected(keyed_client, backend) -> None:
    response = keyed_client.post(
        "/anthropic/v1/messages",
        json=MESSAGES_BODY,
        headers={"Authorization": "Bearer clé".encode("latin-1")},
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "invalid_authorization_format"
    assert backend.requests == []
