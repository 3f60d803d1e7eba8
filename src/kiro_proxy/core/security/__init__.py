from kiro_proxy.core.security.authorization import (
    ensure_header_safe,
    extract_access_token,
    parse_authorization_header,
)

__all__ = [
    "ensure_header_safe",
    "extract_access_token",
    "parse_authorization_header",
]
