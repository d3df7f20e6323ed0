# src/lexindex/configuration/__init__.py
"""Configuration objects for LexIndex.

Instead of factory methods, you pass configuration objects that know how to
build their components.

Provider configurations (build the embedder):
- LiteLLMProvider: Uses LiteLLM for embedding calls

Storage configurations (build data stores):
- LocalStorage: One SQLite file for chunks, vectors and sources

Example:
    from lexindex import LexIndex, LiteLLMProvider, LocalStorage

    index = LexIndex(
        provider=LiteLLMProvider(embedding="openai/text-embedding-3-small"),
        storage=LocalStorage("./data"),
    )
"""

from lexindex.configuration.base import ProviderConfig, StorageConfig
from lexindex.configuration.providers import LiteLLMProvider
from lexindex.configuration.storage import LocalStorage

__all__ = [
    "ProviderConfig",
    "StorageConfig",
    "LiteLLMProvider",
    "LocalStorage",
]
