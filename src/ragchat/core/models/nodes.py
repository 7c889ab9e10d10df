"""Retrieved content units."""

from typing import Any

from pydantic import BaseModel, Field


class TextNode(BaseModel):
    """A unit of retrieved text, cited as provenance for an answer."""

    id_: str = Field(description="Stable identifier of the node")
    text: str = Field(default="", description="Text content of the node")
    metadata: dict[str, Any] = Field(
        default_factory=dict, description="Upstream document metadata"
    )

    def get_text(self) -> str:
        return self.text


class NodeWithScore(BaseModel):
    """A node paired with the relevance score the retriever assigned it."""

    node: TextNode
    score: float | None = Field(
        default=None, description="Relevance score, higher is better"
    )
