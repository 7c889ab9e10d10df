"""Chat engine interface."""

from abc import ABC, abstractmethod

from langchain_core.messages import BaseMessage

from ragchat.core.models import Response


class ChatEngine(ABC):
    """Shared contract of every conversation strategy.

    Implementations own their history and collaborators; nothing mutable
    lives on this base.  One instance serves one conversation, and calls
    to ``achat`` on the same instance must not overlap.
    """

    chat_engine_name: str = ""

    @abstractmethod
    async def achat(
        self, message: str, chat_history: list[BaseMessage] | None = None
    ) -> Response:
        """Run one turn and return the reply.

        Args:
            message: The new user utterance.
            chat_history: Optional history to use instead of the engine's
                own.  It is mutated in place and adopted by the engine.
        """

    @abstractmethod
    def reset(self) -> None:
        """Forget the conversation."""

    def chat_repl(self) -> None:
        """Interactive loops belong to the caller, not the engine."""
        raise NotImplementedError(
            f"{type(self).__name__} does not provide an interactive loop"
        )
