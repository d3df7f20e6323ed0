# src/lexindex/embedder/base.py
"""Embedder abstract base class."""

from abc import ABC, abstractmethod


class Embedder(ABC):
    """Abstract base class for embedding generation.

    Subclasses must implement embed_batch.
    """

    @abstractmethod
    def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """Generate embedding vectors for one batch of texts, in input order."""
        ...

    def embed_text(self, text: str) -> list[float]:
        """Generate an embedding vector for a single text (e.g. a query)."""
        return self.embed_batch([text])[0]
