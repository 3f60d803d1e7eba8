"""
FastAPI response adapters.

Converts domain response envelopes into FastAPI/Starlette responses.
"""

from __future__ import annotations

import json
from typing import Any

from fastapi.responses import JSONResponse, Response

from kiro_proxy.core.domain.responses import ResponseEnvelope


def domain_response_to_fastapi(envelope: ResponseEnvelope) -> Response:
    """Map a ``ResponseEnvelope`` onto a FastAPI response.

    Dict and list content is JSON-encoded; bytes and strings are relayed
    unchanged with the envelope's media type.
    """
    content: Any = envelope.content
    headers = dict(envelope.headers or {})

    if isinstance(content, dict | list):
        return JSONResponse(
            content=content, status_code=envelope.status_code, headers=headers
        )

    if content is None:
        body = b""
    elif isinstance(content, bytes | str):
        body = content
    else:
        body = json.dumps(content, default=str)

    return Response(
        content=body,
        status_code=envelope.status_code,
        media_type=envelope.media_type,
        headers=headers,
    )
