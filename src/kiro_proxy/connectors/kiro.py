"""
Kiro connector.

Runs the translate → negotiate → normalize pipeline for one chat completion.
"""

from __future__ import annotations

import logging

import httpx

from kiro_proxy.connectors.base import LLMBackend
from kiro_proxy.core.config.app_config import AppConfig
from kiro_proxy.core.domain.chat import ChatRequest
from kiro_proxy.core.domain.negotiation import Accepted
from kiro_proxy.core.domain.responses import ResponseEnvelope
from kiro_proxy.core.services.format_negotiator import FormatNegotiator
from kiro_proxy.core.services.kiro_translator import KiroTranslator
from kiro_proxy.core.services.response_normalizer import ResponseNormalizer

logger = logging.getLogger(__name__)


class KiroConnector(LLMBackend):
    """Kiro backend connector with adaptive request format negotiation."""

    backend_type: str = "kiro"

    def __init__(
        self,
        client: httpx.AsyncClient,
        config: AppConfig,
        translator: KiroTranslator | None = None,
        negotiator: FormatNegotiator | None = None,
        normalizer: ResponseNormalizer | None = None,
    ) -> None:
        super().__init__(client, config)
        backend_config = config.backend
        self.api_base_url = backend_config.api_url
        self.translator = translator or KiroTranslator(
            default_model=backend_config.default_model
        )
        self.negotiator = negotiator or FormatNegotiator(
            client,
            attempt_timeout=backend_config.attempt_timeout,
            concurrent=backend_config.concurrent_attempts,
        )
        self.normalizer = normalizer or ResponseNormalizer(self.translator)

    async def chat_completions(
        self, request_data: ChatRequest, access_token: str
    ) -> ResponseEnvelope:
        if request_data.stream:
            logger.debug("Streaming requested; answering with a single completion")

        candidates = self.translator.to_backend_candidates(request_data)
        outcome = await self.negotiator.negotiate(
            candidates, access_token, self.api_base_url
        )

        if isinstance(outcome, Accepted):
            response = self.normalizer.normalize_success(outcome, request_data.model)
            return ResponseEnvelope(content=response.model_dump(), status_code=200)

        return self.normalizer.normalize_failure(outcome)
