"""Shared pytest fixtures for all tests."""

from typing import Any

import pytest
from langchain_core.messages import AIMessage, BaseMessage

from curiosity.core.background_tasks import BackgroundTaskManager
from curiosity.llm.provider import LLMProvider
from curiosity.tools.build_registry import build_registry
from curiosity.tools.core.types import IntegrationFlags
from curiosity.tools.tool_executor import ToolExecutor


class ScriptedLLMProvider(LLMProvider):
    """Provider that replays prepared replies and records every call.

    When the script runs out the last reply is repeated, which is how the
    iteration-limit tests model a backend that keeps asking for tools.
    """

    def __init__(
        self,
        responses: list[AIMessage],
        stream_chunks: list[str] | None = None,
        fail_on_call: int | None = None,
        stream_error: Exception | None = None,
    ):
        self.responses = list(responses)
        self.stream_chunks = list(stream_chunks or [])
        self.fail_on_call = fail_on_call
        self.stream_error = stream_error
        self.calls: list[tuple[list[BaseMessage], list[dict[str, Any]] | None]] = []
        self.stream_calls: list[list[BaseMessage]] = []

    async def ainvoke(self, messages, tools=None):
        self.calls.append((list(messages), tools))
        if self.fail_on_call == len(self.calls):
            raise RuntimeError("upstream unavailable")
        index = min(len(self.calls), len(self.responses)) - 1
        return self.responses[index]

    async def astream(self, messages):
        self.stream_calls.append(list(messages))
        for chunk in self.stream_chunks:
            yield chunk
        if self.stream_error is not None:
            raise self.stream_error

    def get_model_name(self) -> str:
        return "scripted-model"


class RecordingCollaborator:
    """Collaborator that records calls and answers from a fixed table."""

    def __init__(
        self,
        results: dict[str, Any] | None = None,
        failures: dict[str, Exception] | None = None,
    ):
        self.results = results or {}
        self.failures = failures or {}
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def execute(self, name, arguments):
        self.calls.append((name, dict(arguments)))
        if name in self.failures:
            raise self.failures[name]
        return self.results.get(name, f"{name} ok")


def tool_calls_message(*calls: tuple[str, dict[str, Any], str | None]) -> AIMessage:
    """Assistant reply requesting the given (name, args, id) tool calls."""
    return AIMessage(
        content="",
        tool_calls=[{"name": name, "args": args, "id": call_id} for name, args, call_id in calls],
    )


@pytest.fixture(autouse=True)
def cleanup_background_tasks():
    """Cancel background tasks left over by a test.

    TestClient (sync) closes its event loop before scheduled tasks run,
    which would otherwise produce warnings about unawaited coroutines.
    """
    yield

    from curiosity.core.background_tasks import get_background_manager

    manager = get_background_manager()
    if manager.has_tasks:
        manager.cancel_all()


@pytest.fixture
def all_flags() -> IntegrationFlags:
    return IntegrationFlags(
        salesforce=True, monday=True, gmail=True, outlook=True, web=True
    )


@pytest.fixture
def collaborator() -> RecordingCollaborator:
    return RecordingCollaborator()


@pytest.fixture
def background() -> BackgroundTaskManager:
    return BackgroundTaskManager()


@pytest.fixture
def registry(all_flags, collaborator):
    return build_registry(all_flags, collaborator)


@pytest.fixture
def executor(registry, background) -> ToolExecutor:
    return ToolExecutor(registry, background=background)
