"""Data models for LexIndex."""

from lexindex.models.chunk import MAX_HEADING_LENGTH, Chunk, ChunkDraft
from lexindex.models.results import EmbeddingRunResult, IngestResult, RetrievedChunk
from lexindex.models.source import EmbeddingStats, Source, SourceStatus

__all__ = [
    "MAX_HEADING_LENGTH",
    "Chunk",
    "ChunkDraft",
    "EmbeddingRunResult",
    "EmbeddingStats",
    "IngestResult",
    "RetrievedChunk",
    "Source",
    "SourceStatus",
]
