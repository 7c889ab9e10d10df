"""Direct chat engine: the conversation goes straight to the model."""

import logging

from langchain_core.messages import BaseMessage, HumanMessage

from ragchat.core.gateways import ChatGateway
from ragchat.core.metrics import observe_turn
from ragchat.core.models import Response
from ragchat.infra.telemetry import (
    ATTR_CHAT_ENGINE,
    ATTR_CHAT_MESSAGE_LEN,
    ATTR_CHAT_REQUEST_LEN,
    SPAN_CHAT_COMPLETE,
    SPAN_CHAT_TURN,
    tracer,
)

from .base import ChatEngine
from .history import ChatHistory, message_text

logger = logging.getLogger(__name__)

CHAT_ENGINE_SIMPLE = "simple"


class SimpleChatEngine(ChatEngine):
    """No retrieval: append the user message, complete, append the reply."""

    chat_engine_name = CHAT_ENGINE_SIMPLE

    def __init__(
        self,
        llm: ChatGateway,
        chat_history: list[BaseMessage] | None = None,
    ) -> None:
        self.llm = llm
        self.chat_history = ChatHistory(chat_history)

    @observe_turn(CHAT_ENGINE_SIMPLE)
    async def achat(
        self, message: str, chat_history: list[BaseMessage] | None = None
    ) -> Response:
        history = (
            self.chat_history if chat_history is None else ChatHistory(chat_history)
        )
        with tracer.start_as_current_span(SPAN_CHAT_TURN) as span:
            span.set_attribute(ATTR_CHAT_ENGINE, self.chat_engine_name)
            span.set_attribute(ATTR_CHAT_MESSAGE_LEN, len(message))

            history.add_message(HumanMessage(content=message))
            with tracer.start_as_current_span(SPAN_CHAT_COMPLETE) as complete_span:
                complete_span.set_attribute(ATTR_CHAT_REQUEST_LEN, len(history))
                reply = await self.llm.achat(list(history.messages))

            response = Response(response=message_text(reply))
            history.add_message(reply)
            self.chat_history = history
            logger.debug("Simple turn complete (history=%d)", len(history))
            return response

    def reset(self) -> None:
        self.chat_history.clear()
