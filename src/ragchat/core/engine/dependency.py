"""Explicit factories that wire engines from an ``AppConfig``.

Nothing here is cached or global: every call builds fresh collaborators,
so each conversation gets its own engine and history.
"""

from langchain_core.language_models import BaseChatModel
from langchain_core.retrievers import BaseRetriever

from ragchat.configs.config import AppConfig
from ragchat.core.gateways import (
    LangChainChatGateway,
    LangChainRetrieverGateway,
    ServiceContext,
    get_chat_model,
)

from .base import ChatEngine
from .condense import CHAT_ENGINE_CONDENSE_QUESTION, CondenseQuestionChatEngine
from .context import CHAT_ENGINE_CONTEXT, ContextChatEngine
from .query import RetrieverQueryEngine
from .simple import CHAT_ENGINE_SIMPLE, SimpleChatEngine

KNOWN_CHAT_ENGINES = frozenset(
    {CHAT_ENGINE_SIMPLE, CHAT_ENGINE_CONDENSE_QUESTION, CHAT_ENGINE_CONTEXT}
)


def build_chat_engine(
    name: str,
    config: AppConfig,
    service_context: ServiceContext,
    retriever: BaseRetriever | None = None,
    chat_model: BaseChatModel | None = None,
) -> ChatEngine:
    """Create the engine called *name*.

    ``retriever`` is required for the condense-question and context
    engines.  ``chat_model`` only applies to the context engine; when
    omitted one is created from ``config.llm`` with
    ``config.chat.context_model_name``.
    """
    if name not in KNOWN_CHAT_ENGINES:
        raise NotImplementedError(f"Chat engine {name} is not implemented.")

    if name == CHAT_ENGINE_SIMPLE:
        return SimpleChatEngine(llm=service_context.chat_gateway)

    if retriever is None:
        raise ValueError(f"Chat engine {name} requires a retriever")
    retriever_gateway = LangChainRetrieverGateway(retriever)

    if name == CHAT_ENGINE_CONDENSE_QUESTION:
        query_engine = RetrieverQueryEngine(
            retriever=retriever_gateway,
            predictor=service_context.llm_predictor,
            text_qa_prompt=service_context.prompt.text_qa_template(),
        )
        return CondenseQuestionChatEngine(
            query_engine=query_engine,
            service_context=service_context,
        )

    if chat_model is None:
        chat_model = get_chat_model(
            config.llm, model_name=config.chat.context_model_name
        )
    return ContextChatEngine(
        retriever=retriever_gateway,
        chat_model=LangChainChatGateway(chat_model),
        context_system_prompt=service_context.prompt.context_system_template(),
    )
