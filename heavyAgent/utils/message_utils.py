"""Helpers for reading LangChain messages."""

from __future__ import annotations

from langchain_core.messages import BaseMessage


def message_text(message: BaseMessage) -> str:
    """Return the plain text of a message.

    Chat models may return content either as a string or as a list of
    content blocks (``{"type": "text", "text": ...}``). Non-text blocks are
    ignored.
    """
    content = getattr(message, "content", None)
    if not content:
        return ""
    if isinstance(content, str):
        return content

    parts = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


__all__ = ["message_text"]
