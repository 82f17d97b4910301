"""OpenAI-compatible chat provider.

Any endpoint that speaks the OpenAI chat completions protocol works here;
the default configuration points at SambaNova.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

from langchain_core.messages import AIMessage, BaseMessage
from langchain_openai import ChatOpenAI

from curiosity.config.constants import DEFAULT_LLM_BASE_URL, DEFAULT_LLM_MODEL
from curiosity.llm.provider import LLMProvider
from curiosity.llm.providers.types import content_to_text
from curiosity.utils.logger import agent_logger

DEFAULT_CHAT_TEMPERATURE = 0.1
DEFAULT_CHAT_MAX_TOKENS = 2000


class OpenAICompatibleProvider(LLMProvider):
    """LangChain ChatOpenAI wrapper with per-call tool binding."""

    def __init__(
        self,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        api_key: str | None = None,
        base_url: str | None = None,
        llm: ChatOpenAI | None = None,
    ):
        self.model: str = model or DEFAULT_LLM_MODEL
        self.base_url = base_url or DEFAULT_LLM_BASE_URL
        self.temperature = (
            temperature if temperature is not None else DEFAULT_CHAT_TEMPERATURE
        )
        self.max_tokens = (
            max_tokens if max_tokens is not None else DEFAULT_CHAT_MAX_TOKENS
        )

        agent_logger.info(
            "Initializing LLM provider",
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            base_url=self.base_url,
        )

        if llm is None:
            kwargs: dict[str, Any] = {
                "model": self.model,
                "temperature": self.temperature,
                "max_tokens": self.max_tokens,
                "base_url": self.base_url,
            }
            if api_key:
                kwargs["api_key"] = api_key
            llm = ChatOpenAI(**kwargs)
        self.llm = llm

    async def ainvoke(
        self, messages: list[BaseMessage], tools: list[dict[str, Any]] | None = None
    ) -> AIMessage:
        runnable: Any = self.llm.bind_tools(tools) if tools else self.llm
        response = await runnable.ainvoke(messages)
        if isinstance(response, AIMessage):
            return response
        return AIMessage(content=content_to_text(getattr(response, "content", "")))

    async def astream(self, messages: list[BaseMessage]) -> AsyncIterator[str]:
        async for chunk in self.llm.astream(messages):
            text = content_to_text(getattr(chunk, "content", None))
            if text:
                yield text

    def get_model_name(self) -> str:
        return self.model
