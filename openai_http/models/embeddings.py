"""
Embeddings request and response models.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class EmbeddingsOptions(BaseModel):
    """Optional fields of an embeddings request.

    ``api_key`` overrides the client's key for this request and is never
    serialized.
    """

    user: Optional[str] = None
    api_key: Optional[str] = Field(default=None, exclude=True, repr=False)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class Embedding(BaseModel):
    """A single embedding vector."""

    index: int = 0
    object: str = "embedding"
    embedding: List[float] = Field(default_factory=list)


class EmbeddingsUsage(BaseModel):
    prompt_tokens: int = 0
    total_tokens: int = 0


class EmbeddingsResponse(BaseModel):
    """Response of the embeddings endpoint, one `Embedding` per input."""

    object: str = "list"
    data: List[Embedding] = Field(default_factory=list)
    model: str = ""
    usage: EmbeddingsUsage = Field(default_factory=EmbeddingsUsage)

    def vectors(self) -> List[List[float]]:
        """Return the embedding vectors ordered by their ``index``."""
        return [e.embedding for e in sorted(self.data, key=lambda e: e.index)]


__all__ = [
    "EmbeddingsOptions",
    "Embedding",
    "EmbeddingsUsage",
    "EmbeddingsResponse",
]
