"""Helpers for reading and validating JSON request bodies."""

from __future__ import annotations

import json
from typing import Any, TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError

from kiro_proxy.core.common.exceptions import InvalidRequestError
from kiro_proxy.core.constants import CODE_INVALID_JSON, CODE_INVALID_REQUEST

M = TypeVar("M", bound=BaseModel)


def decode_json_body(body: bytes) -> Any:
    """Decode a request body, mapping malformed JSON to a client error."""
    try:
        return json.loads(body)
    except (UnicodeDecodeError, ValueError) as e:
        raise InvalidRequestError(
            f"Malformed JSON payload: {e}", code=CODE_INVALID_JSON
        ) from e


def validate_body(model: type[M], data: Any) -> M:
    """Validate decoded JSON against ``model``."""
    if not isinstance(data, dict):
        raise InvalidRequestError(
            "Request body must be a JSON object", code=CODE_INVALID_REQUEST
        )
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise InvalidRequestError(
            "Request validation failed",
            details={
                "errors": [
                    {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
                    for err in e.errors()
                ]
            },
            code=CODE_INVALID_REQUEST,
        ) from e


async def read_model(request: Request, model: type[M]) -> tuple[bytes, M]:
    """Read the raw body of ``request`` and validate it as ``model``."""
    body = await request.body()
    return body, validate_body(model, decode_json_body(body))
