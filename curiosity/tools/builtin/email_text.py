"""Cleanup of model-written email bodies before they reach a mailbox."""

from __future__ import annotations

import re
from typing import Any

_METADATA_LINE = re.compile(
    r"(^|\n)(?:date|message-?id|from|model)\s*:[^\n]*(?=\n|$)"
    r"|(^|\n)(?:parsed event type|chunk|stream|auth bridge)[^\n]*(?=\n|$)",
    re.IGNORECASE,
)
_EXCESS_NEWLINES = re.compile(r"\n{3,}")

# Smart punctuation and its UTF-8-read-as-Latin-1 mojibake
_CHARACTER_MAP = {
    "‘": "'",
    "’": "'",
    "“": '"',
    "”": '"',
    "–": "-",
    "—": "-",
    "â€™": "'",
    "â€œ": '"',
    "â€\u009d": '"',
    "â€“": "-",
    "â€”": "-",
}


class EmptyEmailBodyError(ValueError):
    pass


def sanitize_email_body(body: str | None) -> str:
    if not body:
        return ""
    text = body.replace("\r", "").replace("\u00a0", " ")
    text = _METADATA_LINE.sub("", text)
    # Longest keys first so mojibake sequences win over their prefixes
    for key in sorted(_CHARACTER_MAP, key=len, reverse=True):
        text = text.replace(key, _CHARACTER_MAP[key])
    text = "\n".join(line.rstrip() for line in text.split("\n"))
    return _EXCESS_NEWLINES.sub("\n\n", text).strip()


def prepare_email(arguments: dict[str, Any]) -> dict[str, Any]:
    """Sanitize ``body``; raise when nothing usable is left."""
    body = sanitize_email_body(arguments.get("body"))
    if not body:
        raise EmptyEmailBodyError(
            "Email body cannot be empty. Write the complete email before saving it."
        )
    return {**arguments, "body": body}
