# src/lexindex/configuration/providers/litellm.py
"""LiteLLM provider configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lexindex.embedder import Embedder
    from lexindex.settings import Settings


@dataclass(frozen=True)
class LiteLLMProvider:
    """Provider configuration using LiteLLM for embedding calls.

    Args:
        embedding: LiteLLM model identifier for embeddings.
                   Examples: "openai/text-embedding-3-small", "gemini/gemini-embedding-001"
        dimensions: Requested vector size. None uses settings.embedding_dimensions.
        api_key: Optional API key; LiteLLM falls back to provider env vars.

    Example:
        provider = LiteLLMProvider(embedding="openai/text-embedding-3-small")
    """

    embedding: str
    dimensions: int | None = None
    api_key: str | None = None

    def build_embedder(self, settings: Settings) -> Embedder:
        """Build a ClientEmbedder on top of a LiteLLM embedding client.

        Args:
            settings: Settings with embedding_dimensions, max_input_chars
                      and the rate limit retry policy.
        """
        from lexindex.embedder import ClientEmbedder
        from lexindex.providers.litellm import LiteLLMEmbeddingClient

        embedding_client = LiteLLMEmbeddingClient(
            model=self.embedding,
            dimensions=self.dimensions or settings.embedding_dimensions,
            api_key=self.api_key,
            max_input_chars=settings.max_input_chars,
        )
        return ClientEmbedder(
            embedding_client=embedding_client,
            max_attempts=settings.max_rate_limit_attempts,
            backoff_seconds=settings.rate_limit_backoff_seconds,
        )
