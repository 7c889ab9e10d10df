"""LangChain retriever bound to the ``RetrieverGateway`` contract."""

import logging

from langchain_core.documents import Document
from langchain_core.retrievers import BaseRetriever

from ragchat.core.models import Event, NodeWithScore, TextNode, event_to_config
from ragchat.infra.id_utils import PREFIX_NODE, generate_id

logger = logging.getLogger(__name__)

# Vector stores that report similarity put it here (e.g. via
# ``similarity_search_with_score`` wrappers).
METADATA_SCORE_KEY = "score"


def document_to_node(document: Document) -> NodeWithScore:
    """Convert a LangChain ``Document`` into a scored ``TextNode``."""
    metadata = dict(document.metadata)
    score = metadata.get(METADATA_SCORE_KEY)
    return NodeWithScore(
        node=TextNode(
            id_=document.id or generate_id(PREFIX_NODE),
            text=document.page_content,
            metadata=metadata,
        ),
        score=float(score) if score is not None else None,
    )


class LangChainRetrieverGateway:
    """Adapts a ``BaseRetriever``; ranking and top-k are the retriever's job."""

    def __init__(self, retriever: BaseRetriever) -> None:
        self._retriever = retriever

    async def aretrieve(
        self, query: str, event: Event | None = None
    ) -> list[NodeWithScore]:
        documents = await self._retriever.ainvoke(query, config=event_to_config(event))
        logger.debug("Retriever returned %d documents", len(documents))
        return [document_to_node(doc) for doc in documents]
