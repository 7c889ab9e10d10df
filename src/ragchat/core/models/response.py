"""Result of one chat turn or query."""

from pydantic import BaseModel, Field

from .nodes import TextNode


class Response(BaseModel):
    """Reply text plus the nodes it was grounded on (possibly none)."""

    response: str = Field(description="Assistant reply text")
    source_nodes: list[TextNode] = Field(
        default_factory=list,
        description="Provenance nodes in retrieval rank order",
    )

    def __str__(self) -> str:
        return self.response
