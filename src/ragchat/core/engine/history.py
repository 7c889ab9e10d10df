"""In-memory conversation history owned by a single chat engine.

``ChatHistory`` is a LangChain ``BaseChatMessageHistory`` so it plugs into
anything that expects one, but it never persists: its lifetime is that of
the engine holding it.
"""

import logging
from collections.abc import Sequence

from langchain_core.chat_history import BaseChatMessageHistory
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from ragchat.core.models import ROLE_ASSISTANT, ROLE_SYSTEM, ROLE_USER

logger = logging.getLogger(__name__)


def message_role(message: BaseMessage) -> str:
    """Return ``user``, ``assistant`` or ``system`` for *message*."""
    if isinstance(message, HumanMessage):
        return ROLE_USER
    if isinstance(message, AIMessage):
        return ROLE_ASSISTANT
    if isinstance(message, SystemMessage):
        return ROLE_SYSTEM
    # ChatMessage carries an explicit role; anything else falls back to type.
    return getattr(message, "role", message.type)


def message_text(message: BaseMessage) -> str:
    """Return the plain text of *message*.

    Content may be a string or a list of content blocks (strings or
    ``{"type": "text", "text": ...}`` dicts); non-text blocks are skipped.
    """
    content = message.content
    if isinstance(content, str):
        return content
    parts: list[str] = []
    for block in content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


def messages_to_history_str(messages: Sequence[BaseMessage]) -> str:
    """Render *messages* as ``"role: content"`` lines."""
    return "\n".join(f"{message_role(m)}: {message_text(m)}" for m in messages)


class ChatHistory(BaseChatMessageHistory):
    """Append-only message list with whole-history reset.

    When constructed from an existing list the list is shared, not copied,
    so appends are visible to whoever passed it in.
    """

    def __init__(self, messages: list[BaseMessage] | None = None) -> None:
        self.messages = messages if messages is not None else []

    def add_messages(self, messages: Sequence[BaseMessage]) -> None:
        self.messages.extend(messages)

    def clear(self) -> None:
        # Rebind rather than empty in place: a list handed in by the caller
        # stays theirs.
        self.messages = []

    def snapshot(self) -> list[BaseMessage]:
        """Return a copy of the current messages for a later ``restore``."""
        return list(self.messages)

    def restore(self, snapshot: Sequence[BaseMessage]) -> None:
        """Roll back to *snapshot*, e.g. after a failed turn."""
        logger.debug(
            "Restoring history from %d to %d messages",
            len(self.messages),
            len(snapshot),
        )
        self.messages = list(snapshot)

    def __len__(self) -> int:
        return len(self.messages)
