"""Separate inline reasoning blocks from a model's final answer.

Some hosted reasoning models (DeepSeek R1 and similar) return their chain of
thought inline as ``<think>...</think>`` before the answer.
"""

from __future__ import annotations

import re

_THINK_BLOCK = re.compile(r"<think>(.*?)</think>", re.DOTALL | re.IGNORECASE)
_UNCLOSED_THINK = re.compile(r"<think>(.*)$", re.DOTALL | re.IGNORECASE)


def split_thinking(text: str) -> tuple[str, str | None]:
    """Return (answer, thinking). ``thinking`` is None when there was none."""
    if not text or "<think>" not in text.lower():
        return text, None
    thoughts = [m.strip() for m in _THINK_BLOCK.findall(text)]
    answer = _THINK_BLOCK.sub("", text)
    # A block that never closed swallows the rest of the reply
    unclosed = _UNCLOSED_THINK.search(answer)
    if unclosed:
        thoughts.append(unclosed.group(1).strip())
        answer = answer[: unclosed.start()]
    thinking = "\n\n".join(t for t in thoughts if t)
    return answer.strip(), thinking or None


_OPEN_TAG = "<think>"
_CLOSE_TAG = "</think>"


def _partial_tag_length(text: str, tag: str) -> int:
    """Length of the longest suffix of ``text`` that starts ``tag``."""
    lowered = text.lower()
    for size in range(min(len(tag) - 1, len(text)), 0, -1):
        if lowered.endswith(tag[:size]):
            return size
    return 0


class ThinkStreamFilter:
    """Incremental ``split_thinking`` for streamed chunks.

    Tags may arrive split across chunks, so a trailing fragment that could
    start a tag is held back until the next chunk decides it.
    """

    def __init__(self) -> None:
        self._buffer = ""
        self._inside = False
        self._thoughts: list[str] = []

    @property
    def thinking(self) -> str | None:
        text = "".join(self._thoughts).strip()
        return text or None

    def feed(self, chunk: str) -> str:
        """Consume a chunk and return the text that is safe to show."""
        self._buffer += chunk
        visible: list[str] = []
        while self._buffer:
            tag = _CLOSE_TAG if self._inside else _OPEN_TAG
            index = self._buffer.lower().find(tag)
            if index == -1:
                keep = _partial_tag_length(self._buffer, tag)
                ready = self._buffer[: len(self._buffer) - keep]
                self._buffer = self._buffer[len(self._buffer) - keep :]
                (self._thoughts if self._inside else visible).append(ready)
                break
            (self._thoughts if self._inside else visible).append(self._buffer[:index])
            self._buffer = self._buffer[index + len(tag) :]
            self._inside = not self._inside
        return "".join(visible)

    def flush(self) -> str:
        """End of stream. An unclosed block swallows whatever is left."""
        rest, self._buffer = self._buffer, ""
        if self._inside:
            self._thoughts.append(rest)
            return ""
        return rest
