# src/lexindex/providers/__init__.py
"""Embedding provider implementations for LexIndex.

Usage:
    from lexindex.providers import EmbeddingClient
    from lexindex.providers.litellm import LiteLLMEmbeddingClient, EmbeddingModels
"""

from lexindex.providers.base import EmbeddingClient, order_by_index
from lexindex.providers.litellm import EmbeddingModels, LiteLLMEmbeddingClient

__all__ = [
    "EmbeddingClient",
    "EmbeddingModels",
    "LiteLLMEmbeddingClient",
    "order_by_index",
]
