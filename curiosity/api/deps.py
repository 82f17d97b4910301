from __future__ import annotations

import asyncio

from curiosity.config.settings import Settings, get_settings
from curiosity.integrations.http import HttpToolCollaborator
from curiosity.llm.provider import LLMProvider, create_provider
from curiosity.services.chat_service import ChatService
from curiosity.tools.activity import LoggingActivityRecorder

# Global chat service instance
_chat_service: ChatService | None = None


def get_app_settings() -> Settings:
    return get_settings()


def get_llm_provider() -> LLMProvider:
    return create_provider(get_settings())


def get_chat_service() -> ChatService:
    global _chat_service
    if _chat_service is None:
        settings = get_settings()
        _chat_service = ChatService(
            get_llm_provider(),
            HttpToolCollaborator(
                settings.integrations_base_url,
                timeout=settings.integrations_timeout,
            ),
            LoggingActivityRecorder(),
            max_iterations=settings.max_iterations,
        )
    return _chat_service


def set_shutdown_event(event: asyncio.Event) -> None:
    """Set shutdown event on the chat service."""
    service = get_chat_service()
    service.set_shutdown_event(event)
