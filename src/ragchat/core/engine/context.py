"""Context-augmented chat engine.

Pipeline per turn::

    new event → retrieve(message) → compose system message
              → append user → [system, *history] → chat completion → record

The composed system message exists only in the request sent to the model;
history keeps user and assistant messages exclusively.
"""

import logging
from collections.abc import Sequence

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from langchain_core.prompts import PromptTemplate

from ragchat.core.gateways import ChatGateway, RetrieverGateway
from ragchat.core.metrics import RETRIEVED_NODES, observe_turn
from ragchat.core.models import Event, NodeWithScore, Response
from ragchat.core.prompt import (
    CONTEXT_SYSTEM_VARIABLES,
    DEFAULT_CONTEXT_SYSTEM_PROMPT,
    VAR_CONTEXT,
    build_template,
    require_variables,
)
from ragchat.infra.telemetry import (
    ATTR_CHAT_ENGINE,
    ATTR_CHAT_EVENT_ID,
    ATTR_CHAT_MESSAGE_LEN,
    ATTR_CHAT_REQUEST_LEN,
    ATTR_RETRIEVE_RESULT_COUNT,
    SPAN_CHAT_COMPLETE,
    SPAN_CHAT_RETRIEVE,
    SPAN_CHAT_TURN,
    tracer,
)

from .base import ChatEngine
from .history import ChatHistory, message_text

logger = logging.getLogger(__name__)

CHAT_ENGINE_CONTEXT = "context"

CONTEXT_SEPARATOR = "\n\n"


def join_node_text(nodes: Sequence[NodeWithScore]) -> str:
    """Concatenate node texts in rank order, separated by a blank line."""
    return CONTEXT_SEPARATOR.join(n.node.get_text() for n in nodes)


class ContextComposer:
    """Renders retrieved nodes into a single system message."""

    def __init__(self, prompt: PromptTemplate) -> None:
        require_variables(prompt, CONTEXT_SYSTEM_VARIABLES)
        self._prompt = prompt

    def compose(self, nodes: Sequence[NodeWithScore]) -> SystemMessage:
        content = self._prompt.format(**{VAR_CONTEXT: join_node_text(nodes)})
        return SystemMessage(content=content)


class ContextChatEngine(ChatEngine):
    """Retrieve on every turn and answer with the context as system prompt.

    No score threshold or top-k is applied here; the retriever decides
    what comes back and in which order.
    """

    chat_engine_name = CHAT_ENGINE_CONTEXT

    def __init__(
        self,
        retriever: RetrieverGateway,
        chat_model: ChatGateway,
        chat_history: list[BaseMessage] | None = None,
        context_system_prompt: PromptTemplate | None = None,
    ) -> None:
        self.retriever = retriever
        self.chat_model = chat_model
        self.chat_history = ChatHistory(chat_history)
        self._composer = ContextComposer(
            context_system_prompt
            or build_template(DEFAULT_CONTEXT_SYSTEM_PROMPT, CONTEXT_SYSTEM_VARIABLES)
        )

    @observe_turn(CHAT_ENGINE_CONTEXT)
    async def achat(
        self, message: str, chat_history: list[BaseMessage] | None = None
    ) -> Response:
        history = (
            self.chat_history if chat_history is None else ChatHistory(chat_history)
        )
        event = Event.new()

        with tracer.start_as_current_span(SPAN_CHAT_TURN) as span:
            span.set_attribute(ATTR_CHAT_ENGINE, self.chat_engine_name)
            span.set_attribute(ATTR_CHAT_EVENT_ID, event.id)
            span.set_attribute(ATTR_CHAT_MESSAGE_LEN, len(message))

            with tracer.start_as_current_span(SPAN_CHAT_RETRIEVE) as retrieve_span:
                nodes = await self.retriever.aretrieve(message, event)
                retrieve_span.set_attribute(ATTR_RETRIEVE_RESULT_COUNT, len(nodes))
            RETRIEVED_NODES.labels(engine=self.chat_engine_name).observe(len(nodes))
            logger.info(
                "Context turn: retrieved %d nodes (event=%s)", len(nodes), event.id
            )

            system_message = self._composer.compose(nodes)
            history.add_message(HumanMessage(content=message))
            request = [system_message, *history.messages]

            with tracer.start_as_current_span(SPAN_CHAT_COMPLETE) as complete_span:
                complete_span.set_attribute(ATTR_CHAT_REQUEST_LEN, len(request))
                reply = await self.chat_model.achat(request, event)

            response = Response(
                response=message_text(reply),
                source_nodes=[n.node for n in nodes],
            )
            history.add_message(reply)
            self.chat_history = history
            return response

    def reset(self) -> None:
        self.chat_history.clear()
