"""
Chat Controller

Handles the OpenAI-compatible chat completion endpoint.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, Response

from kiro_proxy.connectors.base import LLMBackend
from kiro_proxy.core.app.controllers.request_parsing import read_model
from kiro_proxy.core.common.exceptions import ServiceUnavailableError
from kiro_proxy.core.domain.chat import ChatRequest
from kiro_proxy.core.security.authorization import extract_access_token
from kiro_proxy.core.transport.fastapi.response_adapters import (
    domain_response_to_fastapi,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


class ChatController:
    """Controller for chat-related endpoints."""

    def __init__(self, backend: LLMBackend, default_token: str | None = None) -> None:
        """Initialize the controller.

        Args:
            backend: The backend that serves chat completions
            default_token: Access token used when a request carries none
        """
        self._backend = backend
        self._default_token = default_token

    async def handle_chat_completion(self, request: Request) -> Response:
        """Handle chat completion requests.

        The credential is checked before the body is read, so requests
        without one never reach the backend.
        """
        access_token = extract_access_token(
            request.headers.get("Authorization"), self._default_token
        )
        _, request_data = await read_model(request, ChatRequest)

        logger.info(
            "Handling chat completion request: model=%s, messages=%d",
            request_data.model,
            len(request_data.messages),
        )
        envelope = await self._backend.chat_completions(request_data, access_token)
        return domain_response_to_fastapi(envelope)


def get_chat_controller(request: Request) -> ChatController:
    controller = getattr(request.app.state, "chat_controller", None)
    if controller is None:
        raise ServiceUnavailableError("Chat controller is not initialized")
    return controller  # type: ignore[no-any-return]


@router.post("/v1/chat/completions")
async def chat_completions(
    request: Request,
    controller: ChatController = Depends(get_chat_controller),
) -> Response:
    return await controller.handle_chat_completion(request)
