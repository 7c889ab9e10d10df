"""Retriever-backed query engine.

Answers a standalone question in one shot: retrieve, fill the text-QA
prompt with the retrieved context, predict.  This is what the
condense-question engine typically queries with its rewritten question.
"""

import logging

from langchain_core.prompts import PromptTemplate

from ragchat.core.gateways import Predictor, RetrieverGateway
from ragchat.core.models import Event, Response
from ragchat.core.prompt import (
    TEXT_QA_VARIABLES,
    VAR_CONTEXT,
    VAR_QUERY,
    require_variables,
)
from ragchat.infra.telemetry import (
    ATTR_CHAT_EVENT_ID,
    ATTR_RETRIEVE_RESULT_COUNT,
    SPAN_QUERY_ENGINE,
    tracer,
)

from .context import join_node_text

logger = logging.getLogger(__name__)


class RetrieverQueryEngine:
    def __init__(
        self,
        retriever: RetrieverGateway,
        predictor: Predictor,
        text_qa_prompt: PromptTemplate,
    ) -> None:
        require_variables(text_qa_prompt, TEXT_QA_VARIABLES)
        self.retriever = retriever
        self.predictor = predictor
        self.text_qa_prompt = text_qa_prompt

    async def aquery(self, query: str) -> Response:
        event = Event.new()
        with tracer.start_as_current_span(SPAN_QUERY_ENGINE) as span:
            span.set_attribute(ATTR_CHAT_EVENT_ID, event.id)
            nodes = await self.retriever.aretrieve(query, event)
            span.set_attribute(ATTR_RETRIEVE_RESULT_COUNT, len(nodes))

            answer = await self.predictor.apredict(
                self.text_qa_prompt,
                {VAR_CONTEXT: join_node_text(nodes), VAR_QUERY: query},
            )
            logger.debug("Query answered from %d nodes", len(nodes))
            return Response(response=answer, source_nodes=[n.node for n in nodes])
