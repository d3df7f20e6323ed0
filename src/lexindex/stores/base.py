# src/lexindex/stores/base.py
"""Abstract base classes for storage."""

from abc import ABC, abstractmethod
from collections.abc import Iterable

from lexindex.models import Chunk, ChunkDraft, EmbeddingStats, RetrievedChunk, Source, SourceStatus


class ChunkStore(ABC):
    """Abstract base class for chunk and embedding storage."""

    @abstractmethod
    def replace_chunks(self, source_id: str, drafts: list[ChunkDraft]) -> list[Chunk]:
        """Atomically replace all chunks of a source.

        Deletes the previous generation and inserts the drafts with
        chunk_index 0..n-1 in one transaction. On failure nothing changes.
        """
        ...

    @abstractmethod
    def unembedded_chunks(self, source_id: str | None = None) -> list[Chunk]:
        """Chunks without embedding, ordered by (source_id, chunk_index)."""
        ...

    @abstractmethod
    def set_embeddings(self, embeddings: Iterable[tuple[str, list[float]]]) -> int:
        """Attach vectors to chunks in one transaction. Returns the number of chunks updated.

        Chunk ids that no longer exist are ignored.
        """
        ...

    def set_embedding(self, chunk_id: str, embedding: list[float]) -> bool:
        """Attach a vector to a single chunk. Idempotent. Returns False if the chunk is gone."""
        return self.set_embeddings([(chunk_id, embedding)]) == 1

    @abstractmethod
    def query(
        self,
        embedding: list[float],
        candidate_source_ids: Iterable[str],
        top_k: int,
    ) -> list[RetrievedChunk]:
        """Top-k embedded chunks of the candidate sources by cosine similarity.

        Ordered by descending score, ties by ascending chunk_index.
        """
        ...

    @abstractmethod
    def get_by_source(self, source_id: str) -> list[Chunk]:
        """Get all chunks of a source, ordered by chunk_index."""
        ...

    @abstractmethod
    def delete_by_source(self, source_id: str) -> int:
        """Delete all chunks of a source. Returns the number deleted."""
        ...

    @abstractmethod
    def list_sources(self) -> list[str]:
        """List all source ids that have chunks."""
        ...

    @abstractmethod
    def count_chunks(self) -> int:
        """Count the total number of chunks in the store."""
        ...

    @abstractmethod
    def embedding_stats(self, source_ids: Iterable[str] | None = None) -> EmbeddingStats:
        """Count chunks with and without embedding, optionally for some sources."""
        ...

    def source_status(self, source_id: str) -> SourceStatus:
        """Derive a source's processing status from its chunks."""
        return self.embedding_stats([source_id]).status


class SourceRegistry(ABC):
    """Holds source content so ingestion can run by source id.

    Staleness detection stays with the caller: the registry records content
    and its hash but never triggers ingestion.
    """

    @abstractmethod
    def put(self, source: Source) -> Source:
        """Store or update a source. Returns it with content_hash filled in."""

    @abstractmethod
    def get(self, source_id: str) -> Source | None:
        """Get a source by id, or None if not tracked."""

    @abstractmethod
    def delete(self, source_id: str) -> None:
        """Remove a source."""

    @abstractmethod
    def list_sources(self) -> list[str]:
        """List all tracked source ids."""


class MigrationLedger(ABC):
    """Persisted record of applied one-time migrations."""

    @abstractmethod
    def is_applied(self, name: str) -> bool:
        """True if the named migration completed before."""

    @abstractmethod
    def applied(self) -> list[str]:
        """Names of completed migrations, in application order."""
