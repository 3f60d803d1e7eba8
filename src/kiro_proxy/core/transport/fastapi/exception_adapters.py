"""
FastAPI exception adapters.

Renders domain exceptions as the client-facing error envelope.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from kiro_proxy.core.common.exceptions import InvalidRequestError, LLMProxyError
from kiro_proxy.core.constants import (
    CODE_INVALID_REQUEST,
    ERROR_TYPE_SERVER,
    UNEXPECTED_ERROR_MESSAGE,
)

logger = logging.getLogger(__name__)


def domain_exception_to_response(exc: LLMProxyError) -> JSONResponse:
    """Map a domain exception to a JSON error response.

    Args:
        exc: The domain exception to map

    Returns:
        A JSON response carrying the error envelope and status code
    """
    return JSONResponse(content=exc.to_dict(), status_code=exc.status_code)


def register_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers for domain exceptions in a FastAPI app.

    Args:
        app: The FastAPI application to register handlers for
    """

    async def domain_exception_handler(
        request: Request, exc: LLMProxyError
    ) -> Response:
        if exc.status_code >= 500:
            logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc)
        elif logger.isEnabledFor(logging.INFO):
            logger.info(
                "%s on %s: %s (code=%s)",
                type(exc).__name__,
                request.url.path,
                exc.message,
                exc.code,
            )
        return domain_exception_to_response(exc)

    async def validation_exception_handler(
        request: Request, exc: Exception
    ) -> Response:
        errors = exc.errors() if isinstance(exc, RequestValidationError) else []
        logger.warning("Validation error on %s: %s", request.url.path, errors)
        error = InvalidRequestError(
            "Request validation failed",
            details={
                "errors": [
                    {
                        "loc": list(e.get("loc", [])),
                        "msg": e.get("msg", ""),
                        "type": e.get("type", ""),
                    }
                    for e in errors
                ]
            },
            code=CODE_INVALID_REQUEST,
        )
        return domain_exception_to_response(error)

    async def generic_exception_handler(request: Request, exc: Exception) -> Response:
        logger.error("Unhandled exception: %s", exc, exc_info=True)
        return JSONResponse(
            content={
                "error": {
                    "message": UNEXPECTED_ERROR_MESSAGE,
                    "type": ERROR_TYPE_SERVER,
                    "code": None,
                }
            },
            status_code=500,
        )

    app.add_exception_handler(LLMProxyError, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
