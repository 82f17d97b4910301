"""LLM Provider abstraction for flexible model integration."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, Any

from langchain_core.messages import AIMessage, BaseMessage

if TYPE_CHECKING:
    from curiosity.config.settings import Settings


class LLMProvider(ABC):
    """Abstract base class for LLM providers.

    The agent loop depends only on this shape: one blocking call that may
    return tool calls, and one token stream used for the final answer.
    """

    @abstractmethod
    async def ainvoke(
        self, messages: list[BaseMessage], tools: list[dict[str, Any]] | None = None
    ) -> AIMessage:
        """Send the conversation plus tool schemas and return the model reply."""

    @abstractmethod
    def astream(self, messages: list[BaseMessage]) -> AsyncIterator[str]:
        """Stream the model reply as text chunks, without tools."""

    @abstractmethod
    def get_model_name(self) -> str:
        """Get the model name."""


def create_provider(settings: Settings) -> LLMProvider:
    """Build the configured OpenAI-compatible provider."""
    from curiosity.llm.providers.openai.provider import OpenAICompatibleProvider

    return OpenAICompatibleProvider(
        model=settings.model,
        temperature=settings.temperature,
        max_tokens=settings.max_tokens,
        api_key=settings.llm_api_key,
        base_url=settings.llm_base_url,
    )
