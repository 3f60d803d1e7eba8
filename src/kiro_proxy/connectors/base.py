from __future__ import annotations

import abc

import httpx

from kiro_proxy.core.config.app_config import AppConfig
from kiro_proxy.core.domain.chat import ChatRequest
from kiro_proxy.core.domain.responses import ResponseEnvelope


class LLMBackend(abc.ABC):
    """
    Abstract base class for LLM backends.
    Defines the interface for forwarding chat completions to a provider.
    """

    backend_type: str

    def __init__(self, client: httpx.AsyncClient, config: AppConfig) -> None:
        self.client = client
        self.config = config

    @abc.abstractmethod
    async def chat_completions(
        self, request_data: ChatRequest, access_token: str
    ) -> ResponseEnvelope:
        """
        Forwards a chat completion request to the LLM backend.

        Args:
            request_data: The request payload as a domain `ChatRequest`.
            access_token: The credential to present to the backend.

        Returns:
            A ResponseEnvelope holding either the chat completion or an
            error envelope together with its HTTP status.
        """
