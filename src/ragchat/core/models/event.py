"""Tracing correlation event threaded through one chat turn."""

from dataclasses import dataclass, field

from langchain_core.runnables import RunnableConfig

from ragchat.infra.id_utils import PREFIX_EVENT, generate_id

from .constants import (
    EVENT_TAG_FINAL,
    EVENT_TYPE_WRAPPER,
    METADATA_EVENT_ID,
    METADATA_EVENT_TYPE,
)


@dataclass(frozen=True)
class Event:
    """Correlates the retrieval and completion calls of a single turn.

    Purely observational: engines create one per turn and pass it along as
    an extra argument, never storing it on history or responses.
    """

    id: str
    type: str = EVENT_TYPE_WRAPPER
    tags: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def new(
        cls, type: str = EVENT_TYPE_WRAPPER, tags: tuple[str, ...] = (EVENT_TAG_FINAL,)
    ) -> "Event":
        return cls(id=generate_id(PREFIX_EVENT), type=type, tags=tuple(tags))


def event_to_config(event: Event | None) -> RunnableConfig:
    """Translate *event* into a LangChain ``RunnableConfig``.

    Callback handlers and tracers see the event ID in ``metadata`` and its
    tags in ``tags``.  ``None`` yields an empty config.
    """
    if event is None:
        return RunnableConfig()
    return RunnableConfig(
        tags=list(event.tags),
        metadata={METADATA_EVENT_ID: event.id, METADATA_EVENT_TYPE: event.type},
    )
