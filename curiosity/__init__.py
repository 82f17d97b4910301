"""
Curiosity - a sales assistant agent powered by LangChain tool calling.

This package provides:
- A bounded tool-calling agent loop with a topic-aware fallback
- A per-session tool registry for CRM, mailbox, calendar and web tools
- Defensive repair of malformed model tool calls
- Streaming progress events via Server-Sent Events
"""

__version__ = "0.4.0"
