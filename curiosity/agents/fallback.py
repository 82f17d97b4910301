"""Templated answers for runs that never reached a model-written reply."""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class FallbackTopic:
    name: str
    keywords: tuple[str, ...]
    subject: str
    connection: str


FALLBACK_TOPICS: tuple[FallbackTopic, ...] = (
    FallbackTopic(
        "leads", ("lead",), "your leads", "CRM connection (Salesforce or Monday.com)"
    ),
    FallbackTopic(
        "contacts",
        ("contact",),
        "your contacts",
        "CRM connection (Salesforce or Monday.com)",
    ),
    FallbackTopic(
        "opportunities",
        ("opportunit", "deal", "pipeline"),
        "your opportunities",
        "Salesforce connection",
    ),
    FallbackTopic(
        "email",
        ("email", "e-mail", "inbox", "mail", "draft"),
        "your email",
        "email connection (Gmail or Outlook)",
    ),
    FallbackTopic(
        "calendar",
        ("calendar", "meeting", "schedule", "event"),
        "your calendar",
        "calendar connection (Google Calendar or Outlook)",
    ),
    FallbackTopic(
        "tasks",
        ("task", "note", "follow-up", "follow up"),
        "your tasks and notes",
        "CRM connection",
    ),
)


def detect_topic(text: str | None) -> FallbackTopic | None:
    """Topic whose keyword appears earliest in ``text``."""
    if not text:
        return None
    lowered = text.lower()
    best: tuple[int, FallbackTopic] | None = None
    for topic in FALLBACK_TOPICS:
        for keyword in topic.keywords:
            match = re.search(rf"\b{re.escape(keyword)}", lowered)
            if match and (best is None or match.start() < best[0]):
                best = (match.start(), topic)
    return best[1] if best else None


def build_fallback_message(last_user_message: str | None, attempts: int) -> str:
    topic = detect_topic(last_user_message)
    if topic is None:
        return (
            f"I wasn't able to finish that request after {attempts} steps. "
            "Please try again, ideally with a more specific question, and check "
            "that the integrations you need are connected in Settings."
        )
    return (
        f"I wasn't able to finish looking up {topic.subject} after {attempts} steps. "
        f"Please try again with a more specific request, and check that your "
        f"{topic.connection} is active in Settings."
    )
