"""
Pydantic models for Anthropic API request structures.

Only used to check that a passthrough body is well formed; the raw body is
what gets forwarded.
"""

from typing import Any

from pydantic import AliasChoices, ConfigDict, Field

from kiro_proxy.core.interfaces.model_bases import DomainModel


class AnthropicMessage(DomainModel):
    """Represents a message in the Anthropic API."""

    role: str
    content: str | list[dict[str, Any]]


class AnthropicMessagesRequest(DomainModel):
    """Represents a request to the Anthropic Messages API."""

    model_config = ConfigDict(extra="allow")

    model: str = ""
    messages: list[AnthropicMessage] = Field(default_factory=list)
    max_tokens: int | None = Field(
        default=None,
        validation_alias=AliasChoices("max_output_tokens", "max_tokens"),
    )
    temperature: float | None = None
    stream: bool | None = False
