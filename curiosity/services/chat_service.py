"""Chat service: builds a per-request agent and yields SSE-ready events.

This keeps the routers thin; the registry is rebuilt for every request from
the integration flags the caller sends.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from typing import Any

from langchain_core.messages import BaseMessage

from curiosity.agents.agent_loop import AgentLoop, AgentRunResult
from curiosity.config.constants import DEFAULT_MAX_ITERATIONS
from curiosity.core.background_tasks import BackgroundTaskManager
from curiosity.integrations.collaborator import ToolCollaborator
from curiosity.integrations.http import HttpToolCollaborator
from curiosity.llm.provider import LLMProvider
from curiosity.prompts.sales import UserProfile, build_system_prompt
from curiosity.tools.activity import ActivityRecorder
from curiosity.tools.build_registry import build_registry
from curiosity.tools.core.types import IntegrationFlags
from curiosity.tools.tool_executor import ToolExecutor
from curiosity.utils.logger import api_logger, bind_chat_context, clear_chat_context


@dataclass
class ChatTurn:
    query: str
    flags: IntegrationFlags = field(default_factory=IntegrationFlags)
    history: list[BaseMessage] = field(default_factory=list)
    system_prompt: str | None = None
    profile: UserProfile | None = None
    context: dict[str, Any] | None = None
    user_id: str | None = None


class ChatService:
    def __init__(
        self,
        llm_provider: LLMProvider,
        collaborator: ToolCollaborator,
        activity_recorder: ActivityRecorder | None = None,
        *,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        background: BackgroundTaskManager | None = None,
    ) -> None:
        self.llm_provider = llm_provider
        self.collaborator = collaborator
        self.activity_recorder = activity_recorder
        self.max_iterations = max_iterations
        self._background = background
        self._shutdown_event: asyncio.Event | None = None

    def set_shutdown_event(self, event: asyncio.Event) -> None:
        """Set the shutdown event; active streams stop at the next boundary."""
        self._shutdown_event = event

    def _collaborator_for(self, user_id: str | None) -> ToolCollaborator:
        if user_id and isinstance(self.collaborator, HttpToolCollaborator):
            return self.collaborator.with_headers({"X-User-Id": user_id})
        return self.collaborator

    def build_agent(
        self, flags: IntegrationFlags, user_id: str | None = None
    ) -> AgentLoop:
        registry = build_registry(flags, self._collaborator_for(user_id))
        api_logger.debug(
            "Built tool registry",
            integrations=[i.value for i in flags.enabled()],
            tools=registry.names(),
        )
        executor = ToolExecutor(
            registry, self.activity_recorder, background=self._background
        )
        return AgentLoop(
            self.llm_provider,
            registry,
            executor,
            max_iterations=self.max_iterations,
            background=self._background,
        )

    def prepare_messages(self, turn: ChatTurn) -> list[BaseMessage]:
        system_prompt = turn.system_prompt or build_system_prompt(
            turn.flags, turn.profile, turn.context
        )
        return AgentLoop.build_messages(turn.query, system_prompt, turn.history)

    async def chat(self, turn: ChatTurn) -> AgentRunResult:
        bind_chat_context(user_id=turn.user_id)
        try:
            agent = self.build_agent(turn.flags, turn.user_id)
            return await agent.run(self.prepare_messages(turn))
        finally:
            clear_chat_context()

    async def stream_chat(
        self, turn: ChatTurn, chat_id: str | None = None
    ) -> AsyncIterator[dict[str, Any]]:
        bind_chat_context(chat_id=chat_id, user_id=turn.user_id)
        api_logger.info("Starting SSE event generation", query=turn.query[:100])
        try:
            agent = self.build_agent(turn.flags, turn.user_id)
            async for event in agent.stream(
                self.prepare_messages(turn),
                stop_event=self._shutdown_event,
                chat_id=chat_id,
            ):
                api_logger.debug("SSE event", event_type=event.type.value)
                yield event.to_sse()
        finally:
            clear_chat_context()
