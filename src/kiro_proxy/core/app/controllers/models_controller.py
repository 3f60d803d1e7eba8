"""
Models Controller

Serves the static model list and the liveness probe.
"""

from __future__ import annotations

import time
from typing import Any

from fastapi import APIRouter, Response

from kiro_proxy.core.constants import (
    HEALTH_STATUS_OK,
    MODEL_OWNER,
    OBJECT_TYPE_LIST,
    OBJECT_TYPE_MODEL,
    SUPPORTED_MODELS,
)

router = APIRouter(tags=["models"])


def list_models_payload(created: int | None = None) -> dict[str, Any]:
    created = int(time.time()) if created is None else created
    return {
        "object": OBJECT_TYPE_LIST,
        "data": [
            {
                "id": model_id,
                "object": OBJECT_TYPE_MODEL,
                "created": created,
                "owned_by": MODEL_OWNER,
            }
            for model_id in SUPPORTED_MODELS
        ],
    }


@router.get("/v1/models")
async def list_models() -> dict[str, Any]:
    return list_models_payload()


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": HEALTH_STATUS_OK}


@router.options("/{path:path}", include_in_schema=False)
async def options_ok(path: str) -> Response:
    """Answer any OPTIONS request that is not a CORS preflight."""
    return Response(status_code=200)
