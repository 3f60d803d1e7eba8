from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, ConfigDict, Field, field_validator

from kiro_proxy.core.constants import (
    OBJECT_TYPE_CHAT_COMPLETION,
    PLACEHOLDER_COMPLETION_TOKENS,
    PLACEHOLDER_PROMPT_TOKENS,
    PLACEHOLDER_TOTAL_TOKENS,
)
from kiro_proxy.core.domain.base import ValueObject
from kiro_proxy.core.interfaces.model_bases import DomainModel


def extract_text_content(content: Any) -> str:
    """Extract text content from various content formats."""
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        text_parts = []
        for part in content:
            if isinstance(part, dict) and part.get("type") == "text":
                text_parts.append(str(part.get("text", "")))
            elif isinstance(part, str):
                text_parts.append(part)
        return " ".join(text_parts)
    return str(content)


class ChatMessage(ValueObject):
    """
    A chat message in a conversation.

    The role is usually one of ``user``, ``assistant`` or ``system``; any
    other role is carried through unchanged.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    role: str
    content: str = ""

    @field_validator("content", mode="before")
    @classmethod
    def flatten_content(cls, v: Any) -> str:
        """Accept OpenAI multi-part content and keep only its text."""
        return extract_text_content(v)

    def to_dict(self) -> dict[str, Any]:
        return {"role": self.role, "content": self.content}


class ChatRequest(ValueObject):
    """
    A request for a chat completion, as sent by OpenAI-compatible clients.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    model: str = ""
    messages: list[ChatMessage] = Field(default_factory=list)
    max_tokens: int | None = Field(
        default=None,
        ge=0,
        validation_alias=AliasChoices("max_tokens", "max_completion_tokens"),
    )
    temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    # Accepted for compatibility; responses are never streamed.
    stream: bool = False

    @field_validator("stream", mode="before")
    @classmethod
    def coerce_stream(cls, v: Any) -> bool:
        return bool(v) if v is not None else False


class ChatCompletionChoiceMessage(DomainModel):
    """Represents the message content within a chat completion choice."""

    role: str
    content: str


class ChatCompletionChoice(DomainModel):
    """Represents a single choice in a chat completion response."""

    index: int
    message: ChatCompletionChoiceMessage
    finish_reason: str | None = None


class ChatUsage(DomainModel):
    """Token counters reported to the client.

    The backend does not report usage, so the defaults are fixed
    placeholders rather than measured counts.
    """

    prompt_tokens: int = PLACEHOLDER_PROMPT_TOKENS
    completion_tokens: int = PLACEHOLDER_COMPLETION_TOKENS
    total_tokens: int = PLACEHOLDER_TOTAL_TOKENS


class ChatResponse(ValueObject):
    """
    A response from a chat completion.
    """

    id: str
    created: int
    model: str
    choices: list[ChatCompletionChoice]
    usage: ChatUsage = Field(default_factory=ChatUsage)
    object: str = OBJECT_TYPE_CHAT_COMPLETION

    @property
    def content(self) -> str:
        """Text of the first choice, or an empty string."""
        if not self.choices:
            return ""
        return self.choices[0].message.content
