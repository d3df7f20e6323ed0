# src/lexindex/models/chunk.py
"""Chunk data models."""

from uuid import uuid4

from pydantic import BaseModel, Field

MAX_HEADING_LENGTH = 200


class ChunkDraft(BaseModel):
    """A chunk produced by the chunker, before it is persisted."""

    content: str
    heading: str | None = None


class Chunk(BaseModel):
    """A contiguous slice of a source's content, the unit of embedding and retrieval."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    source_id: str
    chunk_index: int = Field(ge=0)
    content: str
    heading: str | None = Field(default=None, max_length=MAX_HEADING_LENGTH)
    embedding: list[float] | None = None

    @property
    def has_embedding(self) -> bool:
        return self.embedding is not None

    @property
    def embedding_text(self) -> str:
        """Text submitted to the embedding provider.

        The heading is prepended so that continuation chunks of a long
        section still carry the section's label in their vector.
        """
        if self.heading:
            return f"{self.heading}\n\n{self.content}"
        return self.content
