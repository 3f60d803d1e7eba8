"""
Application factory for creating the FastAPI application.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from kiro_proxy import __version__
from kiro_proxy.connectors.anthropic_passthrough import AnthropicPassthroughConnector
from kiro_proxy.connectors.kiro import KiroConnector
from kiro_proxy.core.app.controllers import (
    anthropic_router,
    chat_router,
    models_router,
)
from kiro_proxy.core.app.controllers.anthropic_controller import AnthropicController
from kiro_proxy.core.app.controllers.chat_controller import ChatController
from kiro_proxy.core.app.middleware_config import configure_middleware
from kiro_proxy.core.common.logging_utils import get_logger
from kiro_proxy.core.config.app_config import AppConfig
from kiro_proxy.core.transport.fastapi.exception_adapters import (
    register_exception_handlers,
)

logger = get_logger(__name__)


def _attach_services(app: FastAPI, config: AppConfig, client: httpx.AsyncClient) -> None:
    """Wire connectors and controllers around the shared HTTP client."""
    default_token = config.backend.api_key
    app.state.config = config
    app.state.http_client = client
    app.state.chat_controller = ChatController(
        KiroConnector(client, config), default_token=default_token
    )
    app.state.anthropic_controller = AnthropicController(
        AnthropicPassthroughConnector(client, config), default_api_key=default_token
    )


def build_app(
    config: AppConfig | None = None,
    client: httpx.AsyncClient | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: The application configuration; loaded from the environment
            when omitted.
        client: Optional HTTP client for backend calls. A client passed in is
            left open on shutdown; one created here is closed.

    Returns:
        The FastAPI ASGI application instance.
    """
    if config is None:
        config = AppConfig.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned_client = client is None
        http_client = client or httpx.AsyncClient()
        _attach_services(app, config, http_client)

        logger.info(
            "Kiro proxy started",
            chat_endpoint="/v1/chat/completions",
            anthropic_endpoint="/anthropic/v1/messages",
            backend_url=config.backend.api_url,
        )
        if not config.has_default_credential:
            logger.warning(
                "No default access token configured; requests must send an Authorization header",
                env_vars="KIRO_ACCESS_TOKEN or ANTHROPIC_API_KEY",
            )
        try:
            yield
        finally:
            if owned_client:
                await http_client.aclose()
            logger.info("Kiro proxy stopped")

    app = FastAPI(
        title="Kiro Proxy",
        version=__version__,
        lifespan=lifespan,
    )
    configure_middleware(app)
    register_exception_handlers(app)
    app.include_router(chat_router)
    app.include_router(models_router)
    app.include_router(anthropic_router)
    return app
