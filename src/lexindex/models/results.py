# src/lexindex/models/results.py
"""Result data models for ingestion and retrieval."""

from pydantic import BaseModel

from lexindex.models.source import SourceStatus


class RetrievedChunk(BaseModel):
    """A chunk matched by a similarity query."""

    chunk_id: str
    source_id: str
    chunk_index: int
    content: str
    heading: str | None
    score: float  # cosine similarity, 1 - cosine distance


class EmbeddingRunResult(BaseModel):
    """Aggregate counts of one embedding run.

    Attributes:
        total: Unembedded chunks found when the run started
        processed: Chunks that received a vector
        skipped: Chunks never submitted (cancellation or exhausted rate limit)
        failed: Chunks in batches the provider rejected
        cancelled: True if the run stopped on a cancellation request
    """

    total: int = 0
    processed: int = 0
    skipped: int = 0
    failed: int = 0
    cancelled: bool = False


class IngestResult(BaseModel):
    """Outcome of ingesting one source."""

    source_id: str
    chunks: int
    degraded: bool = False
    embedding: EmbeddingRunResult
    status: SourceStatus
