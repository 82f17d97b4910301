"""Language model boundary."""

from .provider import LLMProvider, create_provider

__all__ = ["LLMProvider", "create_provider"]
