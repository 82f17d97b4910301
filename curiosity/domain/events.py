"""Stream event types and factory for the agent progress protocol.

These events are the only externally observable output of the streaming
path. Within one iteration the order is always
thinking -> (tool_start -> tool_result)*; a successful run ends with
content chunks followed by done, a failed run ends with a single error.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Literal


class EventType(str, Enum):
    THINKING = "thinking"
    TOOL_START = "tool_start"
    TOOL_RESULT = "tool_result"
    CONTENT = "content"
    ERROR = "error"
    DONE = "done"


@dataclass
class BaseEvent:
    chat_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        for k, v in list(data.items()):
            if isinstance(v, Enum):
                data[k] = v.value
        return {k: v for k, v in data.items() if v is not None}

    def to_sse(self) -> dict[str, str]:
        return {"data": json.dumps(self.to_dict(), ensure_ascii=False, default=str)}


@dataclass
class ThinkingEvent(BaseEvent):
    type: Literal[EventType.THINKING] = EventType.THINKING
    text: str = ""


@dataclass
class ToolStartEvent(BaseEvent):
    type: Literal[EventType.TOOL_START] = EventType.TOOL_START
    tool_name: str = ""
    args: dict[str, Any] = field(default_factory=dict)


@dataclass
class ToolResultEvent(BaseEvent):
    type: Literal[EventType.TOOL_RESULT] = EventType.TOOL_RESULT
    tool_name: str = ""
    result: str = ""


@dataclass
class ContentEvent(BaseEvent):
    type: Literal[EventType.CONTENT] = EventType.CONTENT
    text: str = ""


@dataclass
class ErrorEvent(BaseEvent):
    type: Literal[EventType.ERROR] = EventType.ERROR
    message: str = ""


@dataclass
class DoneEvent(BaseEvent):
    type: Literal[EventType.DONE] = EventType.DONE
    done: bool = True


StreamEvent = (
    ThinkingEvent
    | ToolStartEvent
    | ToolResultEvent
    | ContentEvent
    | ErrorEvent
    | DoneEvent
)


class EventFactory:
    @staticmethod
    def thinking(text: str, chat_id: str | None = None) -> ThinkingEvent:
        return ThinkingEvent(text=text, chat_id=chat_id)

    @staticmethod
    def tool_start(
        tool_name: str, args: dict[str, Any], chat_id: str | None = None
    ) -> ToolStartEvent:
        return ToolStartEvent(tool_name=tool_name, args=args, chat_id=chat_id)

    @staticmethod
    def tool_result(
        tool_name: str, result: str, chat_id: str | None = None
    ) -> ToolResultEvent:
        return ToolResultEvent(tool_name=tool_name, result=result, chat_id=chat_id)

    @staticmethod
    def content(text: str, chat_id: str | None = None) -> ContentEvent:
        return ContentEvent(text=text, chat_id=chat_id)

    @staticmethod
    def error(message: str, chat_id: str | None = None) -> ErrorEvent:
        return ErrorEvent(message=message, chat_id=chat_id)

    @staticmethod
    def done(chat_id: str | None = None) -> DoneEvent:
        return DoneEvent(chat_id=chat_id)
