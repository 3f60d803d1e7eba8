"""
Anthropic Controller

Relays Anthropic Messages requests to the Kiro backend without translation.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, Response

from kiro_proxy.connectors.anthropic_passthrough import AnthropicPassthroughConnector
from kiro_proxy.core.app.controllers.request_parsing import read_model
from kiro_proxy.core.common.exceptions import (
    AuthenticationError,
    ServiceUnavailableError,
)
from kiro_proxy.core.constants import (
    CODE_MISSING_API_KEY,
    MISSING_API_KEY_MESSAGE,
    PASSTHROUGH_SERVICE_NAME,
)
from kiro_proxy.core.domain.anthropic import AnthropicMessagesRequest
from kiro_proxy.core.security.authorization import (
    ensure_header_safe,
    parse_authorization_header,
)
from kiro_proxy.core.transport.fastapi.response_adapters import (
    domain_response_to_fastapi,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/anthropic", tags=["anthropic"])


class AnthropicController:
    """Controller for the Anthropic passthrough endpoints."""

    def __init__(
        self,
        connector: AnthropicPassthroughConnector,
        default_api_key: str | None = None,
    ) -> None:
        self._connector = connector
        self._default_api_key = default_api_key

    def resolve_api_key(self, header: str | None) -> str:
        """Prefer the request's own token over the configured default."""
        api_key = parse_authorization_header(header) or self._default_api_key
        if not api_key:
            raise AuthenticationError(MISSING_API_KEY_MESSAGE, code=CODE_MISSING_API_KEY)
        ensure_header_safe(api_key)
        return api_key

    async def handle_messages(self, request: Request) -> Response:
        api_key = self.resolve_api_key(request.headers.get("Authorization"))
        body, messages_request = await read_model(request, AnthropicMessagesRequest)
        logger.info(
            "Anthropic messages request for model: %s", messages_request.model
        )
        envelope = await self._connector.forward(body, api_key)
        return domain_response_to_fastapi(envelope)


def get_anthropic_controller(request: Request) -> AnthropicController:
    controller = getattr(request.app.state, "anthropic_controller", None)
    if controller is None:
        raise ServiceUnavailableError("Anthropic controller is not initialized")
    return controller  # type: ignore[no-any-return]


@router.post("")
@router.post("/v1/messages")
async def anthropic_messages(
    request: Request,
    controller: AnthropicController = Depends(get_anthropic_controller),
) -> Response:
    return await controller.handle_messages(request)


@router.get("/health")
async def anthropic_health() -> dict[str, str]:
    return {"status": "healthy", "service": PASSTHROUGH_SERVICE_NAME}
