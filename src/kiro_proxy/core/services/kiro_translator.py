"""
Translation between the OpenAI chat schema and the Kiro backend schemas.

The backend's accepted request shape is not documented, so a single chat
request is rendered into several candidate bodies. Each shape is produced by
a builder registered in a strategy table; adding a shape never requires
touching the negotiator.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from kiro_proxy.core.common.exceptions import TranslationError
from kiro_proxy.core.common.utils import generate_id
from kiro_proxy.core.constants import (
    CODE_TRANSLATION_FAILED,
    CONVERSATION_ID_PREFIX,
    DEFAULT_MODEL,
)
from kiro_proxy.core.domain.chat import ChatRequest, extract_text_content
from kiro_proxy.core.domain.negotiation import CandidateBody, CandidateKind

logger = logging.getLogger(__name__)

# Fields probed, in order, for the assistant's reply in a backend payload
RESPONSE_TEXT_FIELDS = ("message", "content", "text")


@dataclass(frozen=True)
class CandidateContext:
    """Per-call values shared by every candidate builder."""

    conversation_id: str
    default_model: str


CandidateBuilder = Callable[[ChatRequest, CandidateContext], dict[str, Any]]


def _compact(payload: dict[str, Any]) -> dict[str, Any]:
    """Drop optional fields that are unset or zero."""
    return {k: v for k, v in payload.items() if v is not None and v != 0 and v != ""}


def _messages(request: ChatRequest) -> list[dict[str, Any]]:
    return [message.to_dict() for message in request.messages]


def last_user_message(request: ChatRequest) -> str:
    """Return the content of the most recent ``user`` message, or ``""``."""
    for message in reversed(request.messages):
        if message.role == "user":
            return message.content
    return ""


def build_native_conversation(
    request: ChatRequest, context: CandidateContext
) -> dict[str, Any]:
    return {
        "conversationId": context.conversation_id,
        "messages": _messages(request),
        "model": request.model or context.default_model,
        **_compact(
            {"maxTokens": request.max_tokens, "temperature": request.temperature}
        ),
    }


def build_code_assistant(
    request: ChatRequest, context: CandidateContext
) -> dict[str, Any]:
    return {
        "history": _messages(request),
        **_compact(
            {
                "modelId": request.model,
                "maxOutputTokens": request.max_tokens,
                "temperature": request.temperature,
            }
        ),
    }


def build_single_input(request: ChatRequest, context: CandidateContext) -> dict[str, Any]:
    return {
        "input": last_user_message(request),
        **_compact({"modelId": request.model, "maxOutputTokens": request.max_tokens}),
    }


def build_generic_messages(
    request: ChatRequest, context: CandidateContext
) -> dict[str, Any]:
    return {
        "model": request.model or context.default_model,
        "messages": _messages(request),
        **_compact(
            {"max_tokens": request.max_tokens, "temperature": request.temperature}
        ),
    }


DEFAULT_CANDIDATE_BUILDERS: tuple[tuple[CandidateKind, CandidateBuilder], ...] = (
    (CandidateKind.NATIVE_CONVERSATION, build_native_conversation),
    (CandidateKind.CODE_ASSISTANT, build_code_assistant),
    (CandidateKind.SINGLE_INPUT, build_single_input),
    (CandidateKind.GENERIC_MESSAGES, build_generic_messages),
)


class KiroTranslator:
    """Bidirectional mapping between the client schema and the backend schemas."""

    def __init__(
        self,
        default_model: str = DEFAULT_MODEL,
        id_factory: Callable[[str], str] | None = None,
    ) -> None:
        self.default_model = default_model
        self._id_factory = id_factory or generate_id
        self._builders: list[tuple[CandidateKind | str, CandidateBuilder]] = list(
            DEFAULT_CANDIDATE_BUILDERS
        )

    def register_candidate(
        self, kind: CandidateKind | str, builder: CandidateBuilder
    ) -> None:
        """Append a new candidate shape; it is tried after the existing ones.

        Args:
            kind: A unique tag for the shape.
            builder: Callable producing the payload from a request.
        """
        if not callable(builder):
            raise TypeError("Candidate builder must be a callable.")
        if any(existing == kind for existing, _ in self._builders):
            raise ValueError(f"Candidate '{kind}' is already registered.")
        self._builders.append((kind, builder))

    @property
    def candidate_kinds(self) -> list[CandidateKind | str]:
        return [kind for kind, _ in self._builders]

    def to_backend_candidates(self, request: ChatRequest) -> list[CandidateBody]:
        """Render ``request`` into every registered backend shape, in order."""
        context = CandidateContext(
            conversation_id=self._id_factory(CONVERSATION_ID_PREFIX),
            default_model=self.default_model,
        )
        candidates = [
            CandidateBody(kind=kind, payload=builder(request, context))
            for kind, builder in self._builders
        ]
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Built %d backend candidates for model=%s (conversation %s)",
                len(candidates),
                request.model or self.default_model,
                context.conversation_id,
            )
        return candidates

    def from_backend_payload(self, raw: bytes | str) -> str:
        """Extract the assistant's reply from an accepted backend payload.

        Returns the first non-empty of ``message``, ``content`` and ``text``;
        an empty string when none of them carries text.

        Raises:
            TranslationError: If the payload is not a JSON object.
        """
        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as e:
            raise TranslationError(
                "Failed to parse Kiro response",
                details=str(e),
                code=CODE_TRANSLATION_FAILED,
            ) from e

        if not isinstance(data, dict):
            raise TranslationError(
                "Failed to parse Kiro response",
                details=f"Expected a JSON object, got {type(data).__name__}",
                code=CODE_TRANSLATION_FAILED,
            )

        for field in RESPONSE_TEXT_FIELDS:
            text = self._field_text(data.get(field))
            if text:
                return text
        return ""

    def _field_text(self, value: Any) -> str:
        if isinstance(value, dict):
            # {"message": {"role": "assistant", "content": "..."}}
            return extract_text_content(value.get("content"))
        if isinstance(value, str | list):
            return extract_text_content(value)
        return ""
