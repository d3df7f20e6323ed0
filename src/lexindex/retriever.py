# src/lexindex/retriever.py
"""Retrieval interface for LexIndex."""

from collections.abc import Iterable

from lexindex.embedder import Embedder
from lexindex.models import EmbeddingStats, RetrievedChunk
from lexindex.stores import ChunkStore


class Retriever:
    """Similarity lookup over the chunks of a caller-chosen set of sources."""

    def __init__(
        self,
        chunk_store: ChunkStore,
        embedder: Embedder | None = None,
        default_k: int = 35,
    ) -> None:
        """Initialize the retriever.

        Args:
            chunk_store: Store holding chunks and their vectors
            embedder: Embedder for natural-language queries (needed by search only)
            default_k: Default number of results to return
        """
        self.chunk_store = chunk_store
        self.embedder = embedder
        self.default_k = default_k

    def retrieve(
        self,
        query_vector: list[float],
        candidate_source_ids: Iterable[str],
        top_k: int | None = None,
    ) -> list[RetrievedChunk]:
        """Get the chunks closest to a query vector.

        Only embedded chunks of the candidate sources are considered. An
        empty candidate set returns no results.

        Args:
            query_vector: Query embedding (same dimensionality as the store)
            candidate_source_ids: Sources to search within
            top_k: Number of results (default: self.default_k)

        Returns:
            RetrievedChunk list ordered by descending score
        """
        k = self.default_k if top_k is None else top_k
        return self.chunk_store.query(query_vector, list(candidate_source_ids), k)

    def search(
        self,
        query: str,
        candidate_source_ids: Iterable[str],
        top_k: int | None = None,
    ) -> list[RetrievedChunk]:
        """Embed a text query, then retrieve.

        Raises:
            RuntimeError: If the retriever has no embedder
            EmbeddingError: If the query could not be embedded
        """
        if self.embedder is None:
            raise RuntimeError("search requires an embedder; use retrieve with a vector")
        candidates = list(candidate_source_ids)
        if not candidates:
            return []
        query_vector = self.embedder.embed_text(query)
        return self.retrieve(query_vector, candidates, top_k)

    def status(self, source_ids: Iterable[str] | None = None) -> EmbeddingStats:
        """Chunk totals with and without embeddings for the given sources (or all)."""
        return self.chunk_store.embedding_stats(source_ids)
