"""Conversation strategies over a retrieval-augmented pipeline."""

from .base import ChatEngine  # noqa: F401
from .condense import CondenseQuestionChatEngine, QuestionCondenser  # noqa: F401
from .context import ContextChatEngine, ContextComposer, join_node_text  # noqa: F401
from .dependency import KNOWN_CHAT_ENGINES, build_chat_engine  # noqa: F401
from .history import (  # noqa: F401
    ChatHistory,
    message_role,
    message_text,
    messages_to_history_str,
)
from .query import RetrieverQueryEngine  # noqa: F401
from .simple import SimpleChatEngine  # noqa: F401
