"""Maps negotiation outcomes onto OpenAI-style success and error envelopes."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from kiro_proxy.core.common.exceptions import (
    AuthenticationError,
    BackendError,
    LLMProxyError,
)
from kiro_proxy.core.common.utils import generate_id
from kiro_proxy.core.constants import (
    BACKEND_ERROR_MESSAGE_TEMPLATE,
    BACKEND_UNAVAILABLE_MESSAGE,
    CHAT_COMPLETION_ID_PREFIX,
    CODE_BACKEND_ERROR,
    CODE_BACKEND_UNAVAILABLE,
    CODE_INVALID_TOKEN,
    INVALID_TOKEN_DETAILS,
    INVALID_TOKEN_MESSAGE,
)
from kiro_proxy.core.domain.chat import (
    ChatCompletionChoice,
    ChatCompletionChoiceMessage,
    ChatResponse,
    ChatUsage,
)
from kiro_proxy.core.domain.negotiation import Accepted, Rejected
from kiro_proxy.core.domain.responses import ResponseEnvelope
from kiro_proxy.core.services.kiro_translator import KiroTranslator

logger = logging.getLogger(__name__)


class ResponseNormalizer:
    """Builds the client-facing envelope for a negotiation outcome."""

    def __init__(
        self,
        translator: KiroTranslator,
        id_factory: Callable[[str], str] | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.translator = translator
        self._id_factory = id_factory or generate_id
        self._clock = clock

    def normalize_success(self, outcome: Accepted, original_model: str) -> ChatResponse:
        """Wrap the backend's reply in a chat completion.

        The response echoes the model the client asked for, never the
        backend's internal model id.

        Raises:
            TranslationError: If the accepted payload cannot be parsed.
        """
        content = self.translator.from_backend_payload(outcome.body)
        return ChatResponse(
            id=self._id_factory(CHAT_COMPLETION_ID_PREFIX),
            created=int(self._clock()),
            model=original_model,
            choices=[
                ChatCompletionChoice(
                    index=0,
                    message=ChatCompletionChoiceMessage(
                        role="assistant", content=content
                    ),
                    finish_reason="stop",
                )
            ],
            usage=ChatUsage(),
        )

    def failure_error(self, outcome: Rejected) -> LLMProxyError:
        """Classify a final rejection as a domain error."""
        if outcome.is_auth_failure:
            return AuthenticationError(
                INVALID_TOKEN_MESSAGE,
                details=INVALID_TOKEN_DETAILS,
                code=CODE_INVALID_TOKEN,
            )
        if outcome.status_code is None:
            return BackendError(
                BACKEND_UNAVAILABLE_MESSAGE,
                backend_name="kiro",
                details=outcome.error,
                status_code=503,
                code=CODE_BACKEND_UNAVAILABLE,
            )
        # a non-error final status cannot carry an error body
        status_code = outcome.status_code if outcome.status_code >= 400 else 502
        return BackendError(
            BACKEND_ERROR_MESSAGE_TEMPLATE.format(status_code=outcome.status_code),
            backend_name="kiro",
            status_code=status_code,
            code=CODE_BACKEND_ERROR,
        )

    def normalize_failure(self, outcome: Rejected) -> ResponseEnvelope:
        """Render a final rejection as an error envelope with its HTTP status."""
        error = self.failure_error(outcome)
        logger.warning(
            "Kiro request failed: status=%s code=%s", outcome.status_code, error.code
        )
        return ResponseEnvelope(
            content=error.to_dict(),
            status_code=error.status_code,
        )
