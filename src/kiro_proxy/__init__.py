"""OpenAI-compatible proxy in front of the Kiro assistant backend."""

__version__ = "0.1.0"
