"""
Common exception classes for the Kiro proxy.

Every exception carries an HTTP status code hint and renders itself as the
client-facing error envelope ``{"error": {message, type, code, details?}}``.
"""

from __future__ import annotations

from typing import Any

from kiro_proxy.core.constants import (
    ERROR_TYPE_API,
    ERROR_TYPE_AUTHENTICATION,
    ERROR_TYPE_INVALID_REQUEST,
    ERROR_TYPE_SERVER,
)


class LLMProxyError(Exception):
    """Base exception class for all proxy errors."""

    error_type: str = ERROR_TYPE_SERVER

    def __init__(
        self,
        message: str,
        details: str | dict[str, Any] | None = None,
        *,
        status_code: int | None = None,
        code: str | None = None,
    ):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional extra information for the caller
            status_code: Optional HTTP status code hint for transport adapters
            code: Optional stable machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.details = details
        self.status_code = status_code or 500
        self.code = code

    def to_dict(self) -> dict[str, Any]:
        error_dict: dict[str, Any] = {
            "message": self.message,
            "type": self.error_type,
            "code": self.code,
        }
        if self.details:
            error_dict["details"] = self.details
        return {"error": error_dict}


class AuthenticationError(LLMProxyError):
    """Raised when the caller's credential is missing or rejected."""

    error_type = ERROR_TYPE_AUTHENTICATION

    def __init__(
        self,
        message: str = "Authentication failed",
        details: str | dict[str, Any] | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, details, status_code=401, **kwargs)


class BackendError(LLMProxyError):
    """Raised when a backend operation fails."""

    error_type = ERROR_TYPE_API

    def __init__(
        self,
        message: str = "Backend operation failed",
        backend_name: str | None = None,
        details: str | dict[str, Any] | None = None,
        **kwargs: Any,
    ):
        # let adapters map to 502 by default unless overridden
        status_code = kwargs.pop("status_code", 502)
        super().__init__(message, details, status_code=status_code, **kwargs)
        self.backend_name = backend_name


class ConfigurationError(LLMProxyError):
    """Raised when there's a configuration issue."""

    def __init__(
        self,
        message: str = "Configuration error",
        details: str | dict[str, Any] | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, details, status_code=400, **kwargs)


class InvalidRequestError(LLMProxyError):
    """Raised when a request is invalid."""

    error_type = ERROR_TYPE_INVALID_REQUEST

    def __init__(
        self,
        message: str = "Invalid request",
        details: str | dict[str, Any] | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, details, status_code=400, **kwargs)


class ParsingError(LLMProxyError):
    """Raised when parsing fails."""

    def __init__(
        self,
        message: str = "Parsing failed",
        details: str | dict[str, Any] | None = None,
        **kwargs: Any,
    ):
        status_code = kwargs.pop("status_code", 422)
        super().__init__(message, details, status_code=status_code, **kwargs)


class TranslationError(ParsingError):
    """Raised when an accepted backend payload cannot be translated."""

    def __init__(
        self,
        message: str = "Failed to translate backend response",
        details: str | dict[str, Any] | None = None,
        **kwargs: Any,
    ):
        kwargs.setdefault("status_code", 500)
        super().__init__(message, details, **kwargs)


class ServiceUnavailableError(LLMProxyError):
    """Raised when a service is temporarily unavailable."""

    def __init__(
        self,
        message: str = "Service temporarily unavailable",
        details: str | dict[str, Any] | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, details, status_code=503, **kwargs)
