# src/lexindex/providers/litellm/__init__.py
"""LiteLLM provider client for LexIndex.

- LiteLLMEmbeddingClient: Embeddings using LiteLLM
- EmbeddingModels: Curated embedding model constants
"""

from lexindex.providers.litellm.client import LiteLLMEmbeddingClient
from lexindex.providers.litellm.models import EmbeddingModels

__all__ = ["EmbeddingModels", "LiteLLMEmbeddingClient"]
