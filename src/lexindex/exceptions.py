# src/lexindex/exceptions.py
"""Exceptions raised by LexIndex.

Chunking and embedding problems are absorbed by the ingestor; persistence
problems propagate to the caller.
"""


class LexIndexError(Exception):
    """Base class for all LexIndex errors."""


class ChunkingDegradation(LexIndexError):
    """Raised when text cannot be segmented.

    The ingestor recovers by storing the whole text as a single chunk.
    """


class EmbeddingError(LexIndexError):
    """Base class for embedding provider failures."""


class RateLimitError(EmbeddingError):
    """The provider rejected the request because of rate limiting (HTTP 429).

    Retryable: the same batch is resubmitted after a backoff interval.
    """


class EmbeddingProviderError(EmbeddingError):
    """Any non rate-limit provider failure, including malformed responses.

    The batch is skipped and its chunks stay unembedded for a later run.
    """


class PersistenceError(LexIndexError):
    """A storage read or write failed. The transaction has been rolled back."""


class IngestionInProgressError(LexIndexError):
    """Another ingestion for the same source is running."""

    def __init__(self, source_id: str) -> None:
        super().__init__(f"Ingestion already in progress for source '{source_id}'")
        self.source_id = source_id
