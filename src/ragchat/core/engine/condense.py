"""Condense-then-query chat engine.

Each turn first rewrites the user's follow-up into a standalone question
using the prior conversation, then hands that question to a query engine
that does its own retrieval and answering.  History records what the user
actually typed, never the rewritten question.
"""

import logging
from collections.abc import Sequence

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from langchain_core.prompts import PromptTemplate

from ragchat.core.gateways import Predictor, QueryEngine, ServiceContext
from ragchat.core.metrics import CONDENSE_TOTAL, observe_turn
from ragchat.core.models import Response
from ragchat.core.prompt import (
    CONDENSE_QUESTION_VARIABLES,
    VAR_CHAT_HISTORY,
    VAR_QUESTION,
    require_variables,
)
from ragchat.infra.telemetry import (
    ATTR_CHAT_ENGINE,
    ATTR_CHAT_HISTORY_LEN,
    ATTR_CHAT_MESSAGE_LEN,
    ATTR_CONDENSE_PASSTHROUGH,
    SPAN_CHAT_CONDENSE,
    SPAN_CHAT_TURN,
    tracer,
)

from .base import ChatEngine
from .history import ChatHistory, messages_to_history_str

logger = logging.getLogger(__name__)

CHAT_ENGINE_CONDENSE_QUESTION = "condense_question"


class QuestionCondenser:
    """Rewrites a follow-up question into a standalone one.

    With no prior turns there is nothing to resolve against, so the
    question is returned verbatim without calling the predictor.
    """

    def __init__(self, predictor: Predictor, prompt: PromptTemplate) -> None:
        require_variables(prompt, CONDENSE_QUESTION_VARIABLES)
        self._predictor = predictor
        self._prompt = prompt

    async def acondense(self, history: Sequence[BaseMessage], question: str) -> str:
        with tracer.start_as_current_span(SPAN_CHAT_CONDENSE) as span:
            span.set_attribute(ATTR_CHAT_HISTORY_LEN, len(history))
            if not history:
                span.set_attribute(ATTR_CONDENSE_PASSTHROUGH, True)
                CONDENSE_TOTAL.labels(result="passthrough").inc()
                return question

            span.set_attribute(ATTR_CONDENSE_PASSTHROUGH, False)
            condensed = await self._predictor.apredict(
                self._prompt,
                {
                    VAR_QUESTION: question,
                    VAR_CHAT_HISTORY: messages_to_history_str(history),
                },
            )
            CONDENSE_TOTAL.labels(result="predicted").inc()
            logger.debug("Condensed %r into %r", question, condensed)
            return condensed


class CondenseQuestionChatEngine(ChatEngine):
    """Condense the follow-up, query with it, record the original turn."""

    chat_engine_name = CHAT_ENGINE_CONDENSE_QUESTION

    def __init__(
        self,
        query_engine: QueryEngine,
        service_context: ServiceContext,
        chat_history: list[BaseMessage] | None = None,
        condense_message_prompt: PromptTemplate | None = None,
    ) -> None:
        self.query_engine = query_engine
        self.service_context = service_context
        self.chat_history = ChatHistory(chat_history)
        self.condense_message_prompt = (
            condense_message_prompt
            or service_context.prompt.condense_question_template()
        )
        self._condenser = QuestionCondenser(
            service_context.llm_predictor, self.condense_message_prompt
        )

    @observe_turn(CHAT_ENGINE_CONDENSE_QUESTION)
    async def achat(
        self, message: str, chat_history: list[BaseMessage] | None = None
    ) -> Response:
        history = (
            self.chat_history if chat_history is None else ChatHistory(chat_history)
        )
        with tracer.start_as_current_span(SPAN_CHAT_TURN) as span:
            span.set_attribute(ATTR_CHAT_ENGINE, self.chat_engine_name)
            span.set_attribute(ATTR_CHAT_MESSAGE_LEN, len(message))

            condensed = await self._condenser.acondense(history.messages, message)
            response = await self.query_engine.aquery(condensed)

            history.add_messages(
                [HumanMessage(content=message), AIMessage(content=response.response)]
            )
            self.chat_history = history
            logger.info(
                "Condense turn complete (history=%d, sources=%d)",
                len(history),
                len(response.source_nodes),
            )
            return response

    def reset(self) -> None:
        self.chat_history.clear()
