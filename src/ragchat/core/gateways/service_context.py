"""Collaborator bundle shared by engines built from one configuration."""

from dataclasses import dataclass, field

from langchain_core.language_models import BaseChatModel

from ragchat.configs.config import AppConfig
from ragchat.configs.system import PromptConfig

from .base import ChatGateway, Predictor
from .chat import LangChainChatGateway, get_chat_model
from .predictor import LLMPredictor


@dataclass
class ServiceContext:
    """Fully-resolved predictor, chat gateway and prompts.

    Engines never build one implicitly; callers pass it in or build it
    with ``service_context_from_defaults``.
    """

    llm_predictor: Predictor
    chat_gateway: ChatGateway
    prompt: PromptConfig = field(default_factory=PromptConfig)


def service_context_from_defaults(
    config: AppConfig | None = None,
    llm: BaseChatModel | None = None,
) -> ServiceContext:
    """Build a ``ServiceContext`` from *config*.

    When *llm* is omitted a ``ChatOpenAI`` client is created from
    ``config.llm``; the same model backs both prediction and chat.
    """
    if config is None:
        config = AppConfig()
    if llm is None:
        llm = get_chat_model(config.llm)
    return ServiceContext(
        llm_predictor=LLMPredictor(llm),
        chat_gateway=LangChainChatGateway(llm),
        prompt=config.prompt,
    )
