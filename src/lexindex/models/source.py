# src/lexindex/models/source.py
"""Source data models."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field


class SourceStatus(str, Enum):
    """Processing status of a source, derived from its chunks."""

    UNPROCESSED = "unprocessed"  # no chunks
    CHUNKED = "chunked"  # chunks exist, at least one without embedding
    EMBEDDED = "embedded"  # chunks exist, all embedded


class Source(BaseModel):
    """A logical document: statute text, crawled page, uploaded file."""

    id: str
    name: str = ""
    content: str | None = None
    content_hash: str | None = None
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class EmbeddingStats(BaseModel):
    """Embedding coverage for a set of chunks."""

    total: int = 0
    with_embedding: int = 0

    @property
    def without_embedding(self) -> int:
        return self.total - self.with_embedding

    @property
    def percentage(self) -> int:
        """Share of embedded chunks, 0-100. Returns 0 when there are no chunks."""
        if self.total == 0:
            return 0
        return round(100 * self.with_embedding / self.total)

    @property
    def status(self) -> SourceStatus:
        if self.total == 0:
            return SourceStatus.UNPROCESSED
        if self.with_embedding < self.total:
            return SourceStatus.CHUNKED
        return SourceStatus.EMBEDDED
