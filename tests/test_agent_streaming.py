"""Streaming agent loop: event order, terminal events and observers."""

import asyncio

import pytest
from langchain_core.messages import AIMessage, HumanMessage

from conftest import ScriptedLLMProvider, tool_calls_message
from curiosity.agents.agent_loop import AgentLoop
from curiosity.domain.events import EventType


@pytest.fixture
def make_agent(registry, executor, background):
    def _make(provider, **kwargs):
        return AgentLoop(provider, registry, executor, background=background, **kwargs)

    return _make


async def _collect(agent, query="hi", **kwargs):
    return [e async for e in agent.stream([HumanMessage(content=query)], **kwargs)]


def _types(events):
    return [e.type.value for e in events]


@pytest.mark.asyncio
async def test_event_order_with_one_tool_round(make_agent):
    provider = ScriptedLLMProvider(
        [
            tool_calls_message(("web_search", {"query": "Acme"}, "w1")),
            AIMessage(content="unused when streaming"),
        ],
        stream_chunks=["Acme is ", "a rocket company."],
    )

    events = await _collect(make_agent(provider), chat_id="chat-1")

    assert _types(events) == [
        "thinking",
        "tool_start",
        "tool_result",
        "thinking",
        "thinking",
        "content",
        "content",
        "done",
    ]
    assert events[0].text == "Analyzing your request (step 1)..."
    assert events[1].tool_name == "web_search"
    assert events[1].args == {"query": "Acme"}
    assert events[2].result == "web_search ok"
    assert events[3].text == "Analyzing your request (step 2)..."
    assert events[4].text == "Formulating response..."
    assert "".join(e.text for e in events if e.type == EventType.CONTENT) == (
        "Acme is a rocket company."
    )
    assert all(e.chat_id == "chat-1" for e in events)


@pytest.mark.asyncio
async def test_final_stream_sees_tool_results(make_agent):
    provider = ScriptedLLMProvider(
        [tool_calls_message(("web_search", {"query": "Acme"}, "w1")), AIMessage(content="x")],
        stream_chunks=["ok"],
    )

    await _collect(make_agent(provider))

    streamed = provider.stream_calls[0]
    assert streamed[-1].content == "web_search ok"


@pytest.mark.asyncio
async def test_reply_content_used_when_stream_is_empty(make_agent):
    provider = ScriptedLLMProvider([AIMessage(content="Direct answer")])

    events = await _collect(make_agent(provider))

    assert _types(events) == ["thinking", "thinking", "content", "done"]
    assert events[2].text == "Direct answer"


@pytest.mark.asyncio
async def test_streamed_think_block_is_not_shown(make_agent):
    provider = ScriptedLLMProvider(
        [AIMessage(content="x")],
        stream_chunks=["<thi", "nk>", "secret reasoning", "</th", "ink>", "\n\n", "Hello"],
    )

    events = await _collect(make_agent(provider))

    content = "".join(e.text for e in events if e.type == EventType.CONTENT)
    assert content == "Hello"
    assert "secret" not in content
    assert _types(events)[-1] == "done"


@pytest.mark.asyncio
async def test_stream_with_only_reasoning_uses_reply_content(make_agent):
    provider = ScriptedLLMProvider(
        [AIMessage(content="<think>plan</think>Final from reply")],
        stream_chunks=["<think>only reasoning</think>", "  \n"],
    )

    events = await _collect(make_agent(provider))

    assert _types(events) == ["thinking", "thinking", "content", "done"]
    assert events[2].text == "Final from reply"


@pytest.mark.asyncio
async def test_stream_with_no_visible_answer_gets_fallback(make_agent):
    provider = ScriptedLLMProvider(
        [AIMessage(content="<think>nothing to say</think>")],
        stream_chunks=["<think>only reasoning</think>"],
    )

    events = await _collect(make_agent(provider), query="what meetings do I have?")

    assert _types(events) == ["thinking", "thinking", "content", "done"]
    assert events[2].text.strip()
    assert "your calendar" in events[2].text
    assert "<think>" not in events[2].text


@pytest.mark.asyncio
async def test_whitespace_only_stream_gets_fallback(make_agent):
    provider = ScriptedLLMProvider([AIMessage(content="")], stream_chunks=[" ", "\n"])

    events = await _collect(make_agent(provider), query="what meetings do I have?")

    assert _types(events) == ["thinking", "thinking", "content", "done"]
    assert "your calendar" in events[2].text


@pytest.mark.asyncio
async def test_model_failure_ends_with_error_only(make_agent, collaborator):
    provider = ScriptedLLMProvider(
        [tool_calls_message(("web_search", {"query": "a"}, "w1"))], fail_on_call=2
    )

    events = await _collect(make_agent(provider))

    assert _types(events) == [
        "thinking",
        "tool_start",
        "tool_result",
        "thinking",
        "error",
    ]
    assert events[-1].message == "Model call failed: upstream unavailable"
    assert len(collaborator.calls) == 1


@pytest.mark.asyncio
async def test_stream_failure_ends_with_error(make_agent):
    provider = ScriptedLLMProvider(
        [AIMessage(content="x")],
        stream_chunks=["partial"],
        stream_error=ConnectionError("connection reset"),
    )

    events = await _collect(make_agent(provider))

    assert _types(events) == ["thinking", "thinking", "content", "error"]
    assert "connection reset" in events[-1].message


@pytest.mark.asyncio
async def test_iteration_limit_streams_fallback_then_done(make_agent):
    provider = ScriptedLLMProvider(
        [tool_calls_message(("web_search", {"query": "a"}, "w1"))]
    )

    events = await _collect(
        make_agent(provider, max_iterations=2), query="what meetings do I have?"
    )

    assert _types(events) == [
        "thinking",
        "tool_start",
        "tool_result",
        "thinking",
        "tool_start",
        "tool_result",
        "content",
        "done",
    ]
    assert "your calendar" in events[-2].text
    assert provider.stream_calls == []


@pytest.mark.asyncio
async def test_stop_event_before_start(make_agent):
    stop = asyncio.Event()
    stop.set()
    provider = ScriptedLLMProvider([AIMessage(content="never")])

    events = await _collect(make_agent(provider), stop_event=stop)

    assert events == []
    assert provider.calls == []


@pytest.mark.asyncio
async def test_stop_event_between_tool_calls(make_agent, collaborator):
    stop = asyncio.Event()
    provider = ScriptedLLMProvider(
        [
            tool_calls_message(
                ("web_search", {"query": "a"}, "w1"),
                ("web_search", {"query": "b"}, "w2"),
            )
        ]
    )
    agent = make_agent(provider)

    events = []
    async for event in agent.stream([HumanMessage(content="hi")], stop_event=stop):
        events.append(event)
        if event.type == EventType.TOOL_RESULT:
            stop.set()

    assert _types(events) == ["thinking", "tool_start", "tool_result"]
    assert collaborator.calls == [("web_search", {"query": "a"})]


@pytest.mark.asyncio
async def test_observer_callbacks_do_not_block(make_agent, background):
    gate = asyncio.Event()
    seen = []

    async def on_tool_call(name, args):
        await gate.wait()
        seen.append(("call", name, args))

    def on_tool_result(name, result):
        seen.append(("result", name, result))

    provider = ScriptedLLMProvider(
        [tool_calls_message(("web_search", {"query": "a"}, "w1")), AIMessage(content="ok")]
    )

    events = await _collect(
        make_agent(provider), on_tool_call=on_tool_call, on_tool_result=on_tool_result
    )

    # The stream finished while the first observer was still waiting
    assert events[-1].type == EventType.DONE
    assert ("call", "web_search", {"query": "a"}) not in seen

    gate.set()
    await background.drain()
    assert ("call", "web_search", {"query": "a"}) in seen
    assert ("result", "web_search", "web_search ok") in seen


@pytest.mark.asyncio
async def test_failing_observer_does_not_break_stream(make_agent, background):
    def on_tool_result(name, result):
        raise RuntimeError("observer crashed")

    provider = ScriptedLLMProvider(
        [tool_calls_message(("web_search", {"query": "a"}, "w1")), AIMessage(content="ok")]
    )

    events = await _collect(make_agent(provider), on_tool_result=on_tool_result)
    await background.drain()

    assert events[-1].type == EventType.DONE


@pytest.mark.asyncio
async def test_events_serialize_for_sse(make_agent):
    provider = ScriptedLLMProvider(
        [tool_calls_message(("web_search", {"query": "Zürich"}, "w1")), AIMessage(content="ok")]
    )

    events = await _collect(make_agent(provider), chat_id="c9")

    payload = events[1].to_sse()["data"]
    assert '"type": "tool_start"' in payload
    assert "Zürich" in payload
    assert '"chat_id": "c9"' in payload
