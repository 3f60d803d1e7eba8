"""Value types for negotiating a request format with the Kiro backend."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any

from kiro_proxy.core.interfaces.model_bases import InternalDTO


class CandidateKind(str, Enum):
    """Backend request shapes the negotiator is willing to try."""

    NATIVE_CONVERSATION = "native_conversation"
    CODE_ASSISTANT = "code_assistant"
    SINGLE_INPUT = "single_input"
    GENERIC_MESSAGES = "generic_messages"


@dataclass(frozen=True)
class CandidateBody(InternalDTO):
    """One guessed backend request body, tagged with its shape."""

    kind: CandidateKind | str
    payload: dict[str, Any]

    def serialize(self) -> bytes:
        """Encode the payload as compact JSON, preserving key order."""
        return json.dumps(
            self.payload, ensure_ascii=False, separators=(",", ":")
        ).encode("utf-8")


class CredentialEncoding(str, Enum):
    """How the access token is placed in the Authorization header."""

    BEARER = "bearer"
    RAW = "raw"

    def authorization_header(self, token: str) -> str:
        if self is CredentialEncoding.BEARER:
            return f"Bearer {token}"
        return token


@dataclass(frozen=True)
class NegotiationAttempt(InternalDTO):
    """A single point in the attempt space."""

    body: CandidateBody
    content_type: str
    credential: CredentialEncoding

    def describe(self) -> str:
        kind = getattr(self.body.kind, "value", self.body.kind)
        return f"{kind}/{self.credential.value}/{self.content_type}"


@dataclass(frozen=True)
class Accepted(InternalDTO):
    """The backend answered an attempt with HTTP 200."""

    body: bytes
    status_code: int = 200
    attempt: NegotiationAttempt | None = None


@dataclass(frozen=True)
class Rejected(InternalDTO):
    """The backend refused an attempt, or could not be reached.

    ``status_code`` is ``None`` when the attempt failed at the transport
    layer (timeout, refused connection) and no HTTP status was observed.
    """

    status_code: int | None
    body: bytes | None = None
    error: str | None = None

    @property
    def is_auth_failure(self) -> bool:
        return self.status_code in (401, 403)


BackendOutcome = Accepted | Rejected
