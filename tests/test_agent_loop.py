"""Blocking agent loop: termination, tool message bookkeeping and fallbacks."""

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage, ToolMessage

from conftest import ScriptedLLMProvider, tool_calls_message
from curiosity.agents.agent_loop import AgentLoop
from curiosity.agents.errors import ModelCallError
from curiosity.config.constants import RECENT_LEADS_QUERY


@pytest.fixture
def make_agent(registry, executor, background):
    def _make(provider, **kwargs):
        return AgentLoop(provider, registry, executor, background=background, **kwargs)

    return _make


def _tool_messages(messages):
    return [m for m in messages if isinstance(m, ToolMessage)]


@pytest.mark.asyncio
async def test_direct_answer_without_tools(make_agent, collaborator):
    provider = ScriptedLLMProvider([AIMessage(content="Hello! How can I help?")])
    agent = make_agent(provider)

    result = await agent.run(AgentLoop.build_messages("hi", "You are helpful"))

    assert result.content == "Hello! How can I help?"
    assert result.iterations == 1
    assert not result.fallback
    assert _tool_messages(result.messages) == []
    assert collaborator.calls == []
    assert isinstance(result.messages[-1], AIMessage)


@pytest.mark.asyncio
async def test_model_receives_tool_schemas(make_agent, registry):
    provider = ScriptedLLMProvider([AIMessage(content="ok")])

    await make_agent(provider).run([HumanMessage(content="hi")])

    _, tools = provider.calls[0]
    assert [t["function"]["name"] for t in tools] == registry.names()


@pytest.mark.asyncio
async def test_each_tool_call_gets_one_tool_message(make_agent, collaborator):
    provider = ScriptedLLMProvider(
        [
            tool_calls_message(
                ("web_search", {"query": "Acme"}, "call_a"),
                ("query_crm", {}, None),
            ),
            AIMessage(content="Here is what I found."),
        ]
    )

    result = await make_agent(provider).run([HumanMessage(content="show my leads")])

    assistant = result.messages[1]
    assert isinstance(assistant, AIMessage)
    assert [tc["id"] for tc in assistant.tool_calls] == ["call_a", "call_1_1"]
    assert [tc["args"] for tc in assistant.tool_calls] == [{"query": "Acme"}, {}]

    tool_messages = _tool_messages(result.messages)
    assert [m.tool_call_id for m in tool_messages] == ["call_a", "call_1_1"]
    assert [m.content for m in tool_messages] == ["web_search ok", "query_crm ok"]
    assert collaborator.calls == [
        ("web_search", {"query": "Acme"}),
        ("query_crm", {"query": RECENT_LEADS_QUERY}),
    ]
    assert result.tools_used == ["web_search", "query_crm"]

    # The second model call sees the assistant turn followed by its results
    second_call, _ = provider.calls[1]
    assert [type(m) for m in second_call] == [
        HumanMessage,
        AIMessage,
        ToolMessage,
        ToolMessage,
    ]


@pytest.mark.asyncio
async def test_duplicate_ids_are_replaced(make_agent):
    provider = ScriptedLLMProvider(
        [
            tool_calls_message(("web_search", {"query": "a"}, "dup")),
            tool_calls_message(("web_search", {"query": "b"}, "dup")),
            AIMessage(content="done"),
        ]
    )

    result = await make_agent(provider).run([HumanMessage(content="research")])

    ids = [m.tool_call_id for m in _tool_messages(result.messages)]
    assert ids == ["dup", "call_2_0"]


@pytest.mark.asyncio
async def test_stringified_arguments_are_repaired(make_agent, collaborator):
    provider = ScriptedLLMProvider(
        [
            AIMessage(
                content="",
                invalid_tool_calls=[
                    {
                        "name": "web_search",
                        "args": '{"query": "Acme pricing"}',
                        "id": "s1",
                        "error": None,
                    }
                ],
            ),
            AIMessage(content="Pricing summary"),
        ]
    )

    result = await make_agent(provider).run([HumanMessage(content="pricing?")])

    assert collaborator.calls == [("web_search", {"query": "Acme pricing"})]
    assert result.messages[1].tool_calls[0]["args"] == {"query": "Acme pricing"}


@pytest.mark.asyncio
async def test_tool_errors_are_fed_back(make_agent, collaborator):
    provider = ScriptedLLMProvider(
        [
            tool_calls_message(("launch_rocket", {"target": "moon"}, "r1")),
            AIMessage(content="I can't do that."),
        ]
    )

    result = await make_agent(provider).run([HumanMessage(content="go")])

    assert _tool_messages(result.messages)[0].content == (
        "Error: Tool 'launch_rocket' not found"
    )
    assert result.content == "I can't do that."
    assert collaborator.calls == []


@pytest.mark.asyncio
async def test_iteration_limit_returns_fallback(make_agent, collaborator):
    provider = ScriptedLLMProvider(
        [tool_calls_message(("query_crm", {"query": RECENT_LEADS_QUERY}, "q"))]
    )
    agent = make_agent(provider, max_iterations=10)

    result = await agent.run([HumanMessage(content="Show me my leads")])

    assert result.fallback
    assert result.iterations == 10
    assert len(provider.calls) == 10
    assert len(collaborator.calls) == 10
    assert "your leads" in result.content
    assert "after 10 steps" in result.content
    assert result.messages[-1].content == result.content


@pytest.mark.asyncio
async def test_model_failure_is_fatal(make_agent, collaborator):
    provider = ScriptedLLMProvider(
        [tool_calls_message(("web_search", {"query": "a"}, "w1"))], fail_on_call=2
    )

    with pytest.raises(ModelCallError) as excinfo:
        await make_agent(provider).run([HumanMessage(content="research")])

    assert excinfo.value.iteration == 2
    assert "upstream unavailable" in str(excinfo.value)
    assert len(collaborator.calls) == 1


@pytest.mark.asyncio
async def test_empty_answer_uses_fallback(make_agent):
    provider = ScriptedLLMProvider([AIMessage(content="   ")])

    result = await make_agent(provider).run([HumanMessage(content="draft an email")])

    assert result.fallback
    assert "your email" in result.content


@pytest.mark.asyncio
async def test_reasoning_is_split_from_answer(make_agent):
    provider = ScriptedLLMProvider(
        [AIMessage(content="<think>check the CRM first</think>You have 3 leads.")]
    )

    result = await make_agent(provider).run([HumanMessage(content="leads?")])

    assert result.content == "You have 3 leads."
    assert result.thinking == "check the CRM first"


@pytest.mark.asyncio
async def test_input_messages_are_not_mutated(make_agent):
    messages = [HumanMessage(content="hi")]

    await make_agent(ScriptedLLMProvider([AIMessage(content="hey")])).run(messages)

    assert len(messages) == 1


@pytest.mark.asyncio
async def test_invoke_returns_text(make_agent):
    agent = make_agent(ScriptedLLMProvider([AIMessage(content="Sure.")]))

    assert await agent.invoke("hello", "system") == "Sure."


def test_build_messages_keeps_history_order():
    history = [HumanMessage(content="hi"), AIMessage(content="hello")]

    messages = AgentLoop.build_messages("next", "sys", history)

    assert [type(m) for m in messages] == [
        SystemMessage,
        HumanMessage,
        AIMessage,
        HumanMessage,
    ]
    assert messages[-1].content == "next"


def test_iteration_budget_must_be_positive(registry):
    with pytest.raises(ValueError):
        AgentLoop(ScriptedLLMProvider([]), registry, max_iterations=0)
