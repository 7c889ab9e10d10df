"""LangChain chat model bound to the ``ChatGateway`` contract."""

import logging
from collections.abc import Sequence

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage
from langchain_openai import ChatOpenAI

from ragchat.configs.system import LLMConfig
from ragchat.core.models import Event, event_to_config

logger = logging.getLogger(__name__)


class LangChainChatGateway:
    """Forwards message sequences to a LangChain ``BaseChatModel``.

    The event, when present, is passed through the ``RunnableConfig`` so
    that callbacks attached to the model can correlate the call.
    """

    def __init__(self, llm: BaseChatModel) -> None:
        self._llm = llm

    @property
    def model_name(self) -> str | None:
        return getattr(self._llm, "model_name", None)

    async def achat(
        self, messages: Sequence[BaseMessage], event: Event | None = None
    ) -> BaseMessage:
        logger.debug(
            "Chat completion (model=%s, messages=%d, event=%s)",
            self.model_name,
            len(messages),
            event.id if event else None,
        )
        return await self._llm.ainvoke(list(messages), config=event_to_config(event))


def get_chat_model(config: LLMConfig, model_name: str | None = None) -> ChatOpenAI:
    """Create a ``ChatOpenAI`` instance from *config*.

    ``model_name`` overrides ``config.model_name``; the context engine uses
    it to pick its larger-context model.
    """
    return ChatOpenAI(
        base_url=config.endpoint,
        api_key=config.api_key,
        model=model_name or config.model_name,
        temperature=config.temperature,
        max_tokens=config.max_tokens,
        timeout=config.timeout.total_seconds(),
        max_retries=config.max_retries,
    )
