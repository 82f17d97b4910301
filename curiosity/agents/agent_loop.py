"""Bounded tool-calling agent loop.

Each iteration sends the whole conversation plus the registry schemas to the
model. A reply without tool calls is the final answer; otherwise the
assistant message is appended, every requested tool runs in call order, and
each result is appended as a ToolMessage keyed to its call id. When the
iteration budget runs out the caller gets a topic-aware fallback answer
instead of an error. Only a failing model call is fatal.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass, field
from typing import Any

from langchain_core.messages import (
    AIMessage,
    BaseMessage,
    HumanMessage,
    SystemMessage,
    ToolMessage,
)

from curiosity.agents.errors import ModelCallError
from curiosity.agents.fallback import build_fallback_message
from curiosity.agents.reasoning import ThinkStreamFilter, split_thinking
from curiosity.config.constants import DEFAULT_MAX_ITERATIONS
from curiosity.core.background_tasks import (
    BackgroundTaskManager,
    get_background_manager,
)
from curiosity.domain.events import EventFactory, StreamEvent
from curiosity.llm.provider import LLMProvider
from curiosity.llm.providers.types import ToolCallPayload, content_to_text
from curiosity.tools.normalizer import (
    NormalizedArguments,
    extract_tool_calls,
    normalize,
)
from curiosity.tools.registry import ToolRegistry
from curiosity.tools.tool_executor import ToolExecutor
from curiosity.utils.logger import agent_logger

ToolCallCallback = Callable[[str, dict[str, Any]], Any]
ToolResultCallback = Callable[[str, str], Any]


@dataclass
class AgentRunResult:
    content: str
    messages: list[BaseMessage]
    iterations: int
    tool_calls: list[ToolCallPayload] = field(default_factory=list)
    fallback: bool = False
    thinking: str | None = None

    @property
    def tools_used(self) -> list[str]:
        return list(dict.fromkeys(call["name"] for call in self.tool_calls))


@dataclass
class _PlannedCall:
    payload: ToolCallPayload
    normalized: NormalizedArguments


class AgentLoop:
    """Drives model calls and tool execution for one conversation at a time."""

    def __init__(
        self,
        llm_provider: LLMProvider,
        registry: ToolRegistry,
        executor: ToolExecutor | None = None,
        *,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        background: BackgroundTaskManager | None = None,
    ) -> None:
        if max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")
        self.llm_provider = llm_provider
        self.registry = registry
        self.executor = executor or ToolExecutor(registry)
        self.max_iterations = max_iterations
        self._background = background

    @property
    def background(self) -> BackgroundTaskManager:
        return self._background or get_background_manager()

    @staticmethod
    def build_messages(
        query: str,
        system_prompt: str | None = None,
        history: list[BaseMessage] | None = None,
    ) -> list[BaseMessage]:
        messages: list[BaseMessage] = []
        if system_prompt:
            messages.append(SystemMessage(content=system_prompt))
        messages.extend(history or [])
        messages.append(HumanMessage(content=query))
        return messages

    async def invoke(self, query: str, system_prompt: str | None = None) -> str:
        """Run to completion and return only the final answer."""
        result = await self.run(self.build_messages(query, system_prompt))
        return result.content

    async def run(self, messages: list[BaseMessage]) -> AgentRunResult:
        """Blocking path. Raises ModelCallError when the model call fails."""
        conversation: list[BaseMessage] = list(messages)
        schemas = self.registry.schemas()
        seen_ids: set[str] = set()
        executed: list[ToolCallPayload] = []

        for iteration in range(1, self.max_iterations + 1):
            response = await self._call_model(conversation, schemas, iteration)
            planned = self._plan_tool_calls(response, iteration, seen_ids)

            if not planned:
                return self._finish(response, conversation, iteration, executed)

            conversation.append(self._assistant_message(response, planned))
            for call in planned:
                result = await self._execute(call)
                conversation.append(self._tool_message(call, result))
                executed.append(call.payload)

        content = self._fallback(conversation, self.max_iterations)
        conversation.append(AIMessage(content=content))
        return AgentRunResult(
            content=content,
            messages=conversation,
            iterations=self.max_iterations,
            tool_calls=executed,
            fallback=True,
        )

    async def stream(
        self,
        messages: list[BaseMessage],
        *,
        on_tool_call: ToolCallCallback | None = None,
        on_tool_result: ToolResultCallback | None = None,
        stop_event: asyncio.Event | None = None,
        chat_id: str | None = None,
    ) -> AsyncIterator[StreamEvent]:
        """Streaming path: yield progress events while the loop runs.

        A model failure yields one error event and ends the stream without
        done. Setting ``stop_event`` (or closing the generator) stops the run
        before the next model or tool call.
        """
        conversation: list[BaseMessage] = list(messages)
        schemas = self.registry.schemas()
        seen_ids: set[str] = set()

        for iteration in range(1, self.max_iterations + 1):
            if self._stopped(stop_event, iteration):
                return
            yield EventFactory.thinking(
                f"Analyzing your request (step {iteration})...", chat_id
            )

            try:
                response = await self._call_model(conversation, schemas, iteration)
            except ModelCallError as e:
                yield EventFactory.error(str(e), chat_id)
                return

            planned = self._plan_tool_calls(response, iteration, seen_ids)
            if not planned:
                async for event in self._stream_final(
                    conversation, response, iteration, chat_id
                ):
                    yield event
                return

            conversation.append(self._assistant_message(response, planned))
            for call in planned:
                if self._stopped(stop_event, iteration):
                    return
                name, args = call.payload["name"], call.payload["args"]
                yield EventFactory.tool_start(name, args, chat_id)
                self._notify(on_tool_call, name, args)

                result = await self._execute(call)
                conversation.append(self._tool_message(call, result))

                yield EventFactory.tool_result(name, result, chat_id)
                self._notify(on_tool_result, name, result)

        yield EventFactory.content(
            self._fallback(conversation, self.max_iterations), chat_id
        )
        yield EventFactory.done(chat_id)

    async def _call_model(
        self,
        conversation: list[BaseMessage],
        schemas: list[dict[str, Any]],
        iteration: int,
    ) -> AIMessage:
        agent_logger.info(
            "LLM invoke",
            messages=len(conversation),
            iteration=iteration,
            max_iterations=self.max_iterations,
        )
        try:
            response = await self.llm_provider.ainvoke(
                list(conversation), schemas or None
            )
        except Exception as e:
            agent_logger.error(
                "LLM call failed", iteration=iteration, error=str(e), exc_info=True
            )
            raise ModelCallError(f"Model call failed: {e}", iteration=iteration) from e
        return response

    def _plan_tool_calls(
        self, response: AIMessage, iteration: int, seen_ids: set[str]
    ) -> list[_PlannedCall]:
        planned: list[_PlannedCall] = []
        for index, call in enumerate(extract_tool_calls(response)):
            normalized = normalize(call.raw_arguments)
            call_id = call.id
            if not call_id or call_id in seen_ids:
                call_id = f"call_{iteration}_{index}"
                suffix = 1
                while call_id in seen_ids:
                    call_id = f"call_{iteration}_{index}_{suffix}"
                    suffix += 1
            seen_ids.add(call_id)
            planned.append(
                _PlannedCall(
                    ToolCallPayload(
                        name=call.name, args=normalized.arguments, id=call_id
                    ),
                    normalized,
                )
            )
        agent_logger.info(
            "LLM response",
            iteration=iteration,
            has_tool_calls=bool(planned),
            tool_calls=[p.payload["name"] for p in planned],
        )
        return planned

    @staticmethod
    def _assistant_message(
        response: AIMessage, planned: list[_PlannedCall]
    ) -> AIMessage:
        # Re-emit the calls with repaired arguments and guaranteed ids
        return AIMessage(
            content=response.content,
            tool_calls=[
                {
                    "name": p.payload["name"],
                    "args": p.payload["args"],
                    "id": p.payload["id"],
                }
                for p in planned
            ],
        )

    @staticmethod
    def _tool_message(call: _PlannedCall, result: str) -> ToolMessage:
        return ToolMessage(
            content=result,
            tool_call_id=call.payload["id"],
            name=call.payload["name"],
        )

    async def _execute(self, call: _PlannedCall) -> str:
        agent_logger.info(
            "Tool call",
            tool=call.payload["name"],
            call_id=call.payload["id"],
            shape=call.normalized.shape.value,
        )
        return await self.executor.execute(
            call.payload["name"],
            call.payload["args"],
            shape=call.normalized.shape,
            source=call.normalized.source,
        )

    def _finish(
        self,
        response: AIMessage,
        conversation: list[BaseMessage],
        iteration: int,
        executed: list[ToolCallPayload],
    ) -> AgentRunResult:
        answer, thinking = split_thinking(content_to_text(response.content))
        fallback = not answer.strip()
        if fallback:
            agent_logger.warning("Model returned an empty answer", iteration=iteration)
            answer = self._fallback(conversation, iteration)
        else:
            agent_logger.info(
                "Final answer", iteration=iteration, length=len(answer)
            )
        conversation.append(AIMessage(content=answer))
        return AgentRunResult(
            content=answer,
            messages=conversation,
            iterations=iteration,
            tool_calls=executed,
            fallback=fallback,
            thinking=thinking,
        )

    async def _stream_final(
        self,
        conversation: list[BaseMessage],
        response: AIMessage,
        iteration: int,
        chat_id: str | None,
    ) -> AsyncIterator[StreamEvent]:
        yield EventFactory.thinking("Formulating response...", chat_id)
        think_filter = ThinkStreamFilter()
        emitted = False
        try:
            async for chunk in self.llm_provider.astream(list(conversation)):
                text = think_filter.feed(chunk) if chunk else ""
                # Whitespace before the first visible text is dropped
                if not emitted:
                    text = text.lstrip()
                if text:
                    emitted = True
                    yield EventFactory.content(text, chat_id)
        except Exception as e:
            agent_logger.error("LLM stream failed", error=str(e), exc_info=True)
            yield EventFactory.error(f"Model call failed: {e}", chat_id)
            return

        rest = think_filter.flush()
        if not emitted:
            rest = rest.lstrip()
        if rest:
            emitted = True
            yield EventFactory.content(rest, chat_id)
        if think_filter.thinking:
            agent_logger.debug(
                "Dropped streamed reasoning", length=len(think_filter.thinking)
            )

        if not emitted:
            answer, _ = split_thinking(content_to_text(response.content))
            if not answer.strip():
                agent_logger.warning(
                    "Model returned an empty answer", iteration=iteration
                )
                answer = self._fallback(conversation, iteration)
            yield EventFactory.content(answer, chat_id)
        yield EventFactory.done(chat_id)

    def _fallback(self, conversation: list[BaseMessage], attempts: int) -> str:
        last_user = next(
            (
                content_to_text(m.content)
                for m in reversed(conversation)
                if isinstance(m, HumanMessage)
            ),
            None,
        )
        agent_logger.warning(
            "Using fallback answer",
            attempts=attempts,
            has_user_message=last_user is not None,
        )
        return build_fallback_message(last_user, attempts)

    @staticmethod
    def _stopped(stop_event: asyncio.Event | None, iteration: int) -> bool:
        if stop_event is not None and stop_event.is_set():
            agent_logger.info("Agent run stopped by caller", iteration=iteration)
            return True
        return False

    def _notify(self, callback: Callable[..., Any] | None, *args: Any) -> None:
        """Fire-and-forget delivery of a tool event to an observer callback."""
        if callback is None:
            return

        async def _deliver() -> None:
            result = callback(*args)
            if inspect.isawaitable(result):
                await result

        self.background.create_task(
            _deliver(), name=f"callback:{getattr(callback, '__name__', 'observer')}"
        )
