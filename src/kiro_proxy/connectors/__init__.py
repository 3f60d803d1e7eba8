from .anthropic_passthrough import AnthropicPassthroughConnector
from .base import LLMBackend
from .kiro import KiroConnector

__all__ = ["AnthropicPassthroughConnector", "KiroConnector", "LLMBackend"]
