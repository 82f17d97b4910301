from __future__ import annotations

import time
import uuid

from fastapi import APIRouter, Depends, HTTPException, Request
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage

from curiosity.agents.errors import ModelCallError
from curiosity.api.deps import get_chat_service
from curiosity.api.schemas import ChatRequest, ChatResponse, Message
from curiosity.api.sse import stream_response
from curiosity.services.chat_service import ChatService, ChatTurn
from curiosity.utils.logger import api_logger, log_chat_request

router = APIRouter()


def _to_history(messages: list[Message]) -> list[BaseMessage]:
    history: list[BaseMessage] = []
    for msg in messages:
        if msg.role == "user":
            history.append(HumanMessage(content=msg.content))
        elif msg.role == "assistant":
            history.append(AIMessage(content=msg.content))
    return history


def split_history(
    messages: list[Message], message: str | None = None
) -> tuple[str, list[BaseMessage]]:
    """Return the user query and the prior user/assistant turns.

    An explicit ``message`` is the query and every entry in ``messages`` is
    history; otherwise the last non-blank user message is the query.
    """
    if message and message.strip():
        return message, _to_history(messages)
    for index in range(len(messages) - 1, -1, -1):
        if messages[index].role == "user" and messages[index].content.strip():
            return messages[index].content, _to_history(messages[:index])
    return "", []


@router.post("/api/chat")
async def chat(
    request: ChatRequest,
    raw_request: Request,
    chat_service: ChatService = Depends(get_chat_service),  # noqa: B008
):
    started_at = time.perf_counter()
    client_host = raw_request.client.host if raw_request.client else "unknown"

    api_logger.info(
        "Chat request received",
        client=client_host,
        streaming=request.stream,
        message_count=len(request.messages),
        integrations=[i.value for i in request.integrations.enabled()],
    )

    user_message, history = split_history(request.messages, request.message)
    if not user_message:
        api_logger.warning("No user message found in request")
        raise HTTPException(status_code=400, detail="No user message found")

    turn = ChatTurn(
        query=user_message,
        flags=request.integrations,
        history=history,
        system_prompt=request.system_prompt,
        profile=request.profile,
        context=request.context or None,
        user_id=request.user_id,
    )
    chat_id = request.chat_id or uuid.uuid4().hex

    if request.stream:
        api_logger.info("Returning SSE streaming response", chat_id=chat_id)
        response = stream_response(
            chat_service.stream_chat(turn, chat_id), chat_id=chat_id
        )
        log_chat_request(api_logger, started_at, streaming=True, chat_id=chat_id)
        return response

    try:
        result = await chat_service.chat(turn)
    except ModelCallError as e:
        api_logger.error("Chat request failed", error=str(e))
        raise HTTPException(status_code=502, detail=str(e)) from e

    log_chat_request(
        api_logger,
        started_at,
        streaming=False,
        response_length=len(result.content),
        iterations=result.iterations,
    )
    return ChatResponse(
        content=result.content,
        fallback=result.fallback,
        tools_used=result.tools_used,
        iterations=result.iterations,
    )
