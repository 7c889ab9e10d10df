"""Gateway contracts and their LangChain bindings."""

from .base import ChatGateway, Predictor, QueryEngine, RetrieverGateway  # noqa: F401
from .chat import LangChainChatGateway, get_chat_model  # noqa: F401
from .predictor import LLMPredictor  # noqa: F401
from .retriever import LangChainRetrieverGateway, document_to_node  # noqa: F401
from .service_context import (  # noqa: F401
    ServiceContext,
    service_context_from_defaults,
)
