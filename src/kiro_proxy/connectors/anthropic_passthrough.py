"""
Anthropic passthrough connector.

Forwards Anthropic Messages requests to the Kiro endpoint unchanged and
relays the upstream status and body as-is.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

import httpx

from kiro_proxy.core.common.exceptions import BackendError
from kiro_proxy.core.common.logging_utils import redact
from kiro_proxy.core.config.app_config import AppConfig
from kiro_proxy.core.constants import (
    AMZ_DATE_FORMAT,
    AMZ_TARGET,
    CODE_BACKEND_UNREACHABLE,
    CONTENT_TYPE_JSON,
    PASSTHROUGH_USER_AGENT,
)
from kiro_proxy.core.domain.responses import ResponseEnvelope

logger = logging.getLogger(__name__)


class AnthropicPassthroughConnector:
    """Relays raw Anthropic-format bodies to the backend."""

    backend_type: str = "anthropic-passthrough"

    def __init__(self, client: httpx.AsyncClient, config: AppConfig) -> None:
        self.client = client
        self.api_base_url = config.backend.api_url
        self.timeout = config.backend.passthrough_timeout

    def get_headers(self, api_key: str) -> dict[str, str]:
        return {
            "Content-Type": CONTENT_TYPE_JSON,
            "Authorization": f"Bearer {api_key}",
            "User-Agent": PASSTHROUGH_USER_AGENT,
            "Accept": CONTENT_TYPE_JSON,
            "X-Amz-Target": AMZ_TARGET,
            "X-Amz-Date": datetime.now(timezone.utc).strftime(AMZ_DATE_FORMAT),
        }

    async def forward(self, body: bytes, api_key: str) -> ResponseEnvelope:
        """Post ``body`` to the backend and return its response verbatim.

        Raises:
            BackendError: If the backend cannot be reached.
        """
        logger.info("Forwarding Anthropic request (key %s)", redact(api_key))
        try:
            response = await self.client.post(
                self.api_base_url,
                content=body,
                headers=self.get_headers(api_key),
                timeout=self.timeout,
            )
        except httpx.HTTPError as e:
            logger.error("Anthropic passthrough request failed: %s", e)
            raise BackendError(
                f"Proxy request failed: {e}",
                backend_name=self.backend_type,
                code=CODE_BACKEND_UNREACHABLE,
            ) from e

        return ResponseEnvelope(
            content=response.content,
            status_code=response.status_code,
            media_type=CONTENT_TYPE_JSON,
        )
