# src/lexindex/chunker/base.py
"""Chunker abstract base class."""

from abc import ABC, abstractmethod

from lexindex.models import ChunkDraft


class Chunker(ABC):
    """Abstract base class for text segmentation.

    Implementations must be deterministic: the same text always yields
    the same drafts, which keeps re-ingestion idempotent.
    """

    @abstractmethod
    def chunk(self, text: str) -> list[ChunkDraft]:
        """Split text into ordered chunk drafts."""
        ...
