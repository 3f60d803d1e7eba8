"""Extraction of the caller's Kiro access token from the Authorization header."""

from __future__ import annotations

from kiro_proxy.core.common.exceptions import AuthenticationError
from kiro_proxy.core.constants import (
    CODE_INVALID_AUTHORIZATION_FORMAT,
    CODE_MISSING_AUTHORIZATION,
    INVALID_AUTHORIZATION_FORMAT_MESSAGE,
    MISSING_AUTHORIZATION_MESSAGE,
)

BEARER_PREFIX = "bearer"


def parse_authorization_header(header: str | None) -> str | None:
    """Return the token carried by ``header``.

    Accepts ``Bearer <token>`` (scheme matched case-insensitively) or a raw
    token. Returns ``None`` when the header is absent or blank, and an empty
    string when a scheme is present without a token.
    """
    if header is None or not header.strip():
        return None

    value = header.strip()
    scheme, _, rest = value.partition(" ")
    if scheme.lower() == BEARER_PREFIX:
        return rest.strip()
    return value


def extract_access_token(header: str | None, default_token: str | None = None) -> str:
    """Resolve the access token for a request.

    Args:
        header: The raw Authorization header value, if any.
        default_token: Token configured at startup, used when the request
            carries no Authorization header.

    Raises:
        AuthenticationError: ``missing_authorization`` when no credential is
            available, ``invalid_authorization_format`` when the header holds
            no usable token (empty, or not plain ASCII).
    """
    token = parse_authorization_header(header)
    if token is None:
        if default_token:
            return default_token
        raise AuthenticationError(
            MISSING_AUTHORIZATION_MESSAGE, code=CODE_MISSING_AUTHORIZATION
        )
    ensure_header_safe(token)
    return token


def ensure_header_safe(token: str) -> None:
    """Reject tokens that cannot be sent back out in an HTTP header.

    Raises:
        AuthenticationError: ``invalid_authorization_format`` for an empty
            or non-ASCII token.
    """
    if not token or not token.isascii():
        raise AuthenticationError(
            INVALID_AUTHORIZATION_FORMAT_MESSAGE, code=CODE_INVALID_AUTHORIZATION_FORMAT
        )
