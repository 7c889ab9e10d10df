"""Capability contracts the chat engines depend on.

Engines only ever see these protocols.  Concrete bindings to LangChain
models and retrievers live next to this module; tests bind them to
in-memory stubs.
"""

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

from langchain_core.messages import BaseMessage
from langchain_core.prompts import PromptTemplate

from ragchat.core.models import Event, NodeWithScore, Response


@runtime_checkable
class ChatGateway(Protocol):
    """Turns an ordered message sequence into the next assistant message.

    The first element may be a system message.  Failures (network, auth,
    rate limit) are raised as-is.
    """

    async def achat(
        self, messages: Sequence[BaseMessage], event: Event | None = None
    ) -> BaseMessage: ...


@runtime_checkable
class Predictor(Protocol):
    """Single-shot, stateless text-in/text-out prediction."""

    async def apredict(
        self, prompt: PromptTemplate, variables: Mapping[str, Any]
    ) -> str: ...


@runtime_checkable
class RetrieverGateway(Protocol):
    """Returns nodes relevant to *query*, ranked best-first."""

    async def aretrieve(
        self, query: str, event: Event | None = None
    ) -> list[NodeWithScore]: ...


@runtime_checkable
class QueryEngine(Protocol):
    """Self-contained retrieval plus answer for a standalone question."""

    async def aquery(self, query: str) -> Response: ...
