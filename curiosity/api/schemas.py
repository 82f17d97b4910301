"""API request and response schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from curiosity.prompts.sales import UserProfile
from curiosity.tools.core.types import IntegrationFlags


class Message(BaseModel):
    role: str
    content: str


class ChatRequest(BaseModel):
    # A single message, or the conversation ending with the latest user turn
    message: str | None = None
    messages: list[Message] = []
    integrations: IntegrationFlags = Field(default_factory=IntegrationFlags)
    system_prompt: str | None = None
    profile: UserProfile | None = None
    context: dict[str, Any] = {}
    stream: bool = True
    chat_id: str | None = None
    user_id: str | None = None


class ChatResponse(BaseModel):
    content: str
    done: bool = True
    fallback: bool = False
    tools_used: list[str] = []
    iterations: int = 0


class HealthResponse(BaseModel):
    status: str = "ok"
    service: str = "curiosity-agent"
    version: str | None = None
    model: str | None = None
    config_valid: bool | None = None
    config_errors: list[str] | None = None
