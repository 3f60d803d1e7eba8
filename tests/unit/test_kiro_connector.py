import json

import httpx
import pytest
from kiro_proxy.connectors import KiroConnector
from kiro_proxy.core.common.exceptions import TranslationError
from kiro_proxy.core.services.kiro_translator import KiroTranslator
from kiro_proxy.core.services.response_normalizer import ResponseNormalizer


def _connector(app_config, fixed_ids, handler) -> tuple[KiroConnector, httpx.AsyncClient]:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    translator = KiroTranslator(id_factory=fixed_ids)
    connector = KiroConnector(
        client,
        app_config,
        translator=translator,
        normalizer=ResponseNormalizer(translator, id_factory=fixed_ids),
    )
    return connector, client


@pytest.mark.asyncio
async def test_chat_completion_success(app_config, fixed_ids, chat_request) -> None:
    bodies: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={"content": "hello from kiro"})

    connector, client = _connector(app_config, fixed_ids, handler)
    async with client:
        envelope = await connector.chat_completions(chat_request, "token")

    assert envelope.status_code == 200
    assert envelope.content["model"] == "gpt-4o"
    assert envelope.content["object"] == "chat.completion"
    assert envelope.content["choices"][0]["message"] == {
        "role": "assistant",
        "content": "hello from kiro",
    }
    assert envelope.content["usage"]["total_tokens"] == 300
    assert len(bodies) == 1
    assert bodies[0]["conversationId"].startswith("conv_")


@pytest.mark.asyncio
async def test_chat_completion_auth_failure(app_config, fixed_ids, chat_request) -> None:
    connector, client = _connector(
        app_config, fixed_ids, lambda request: httpx.Response(403)
    )
    async with client:
        envelope = await connector.chat_completions(chat_request, "expired")

    assert envelope.status_code == 401
    assert envelope.content["error"]["code"] == "invalid_token"


@pytest.mark.asyncio
async def test_unparseable_accepted_body_raises(
    app_config, fixed_ids, chat_request
) -> None:
    connector, client = _connector(
        app_config, fixed_ids, lambda request: httpx.Response(200, content=b"not json")
    )
    async with client:
        with pytest.raises(TranslationError):
            await connector.chat_completions(chat_request, "token")


def test_backend_url_comes_from_config(app_config) -> None:
    connector = KiroConnector(httpx.AsyncClient(), app_config)
    assert connector.api_base_url == app_config.backend.api_url
