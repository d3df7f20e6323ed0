# src/lexindex/configuration/base.py
"""Protocol definitions for configuration objects.

Provider and storage configurations are structural: any frozen dataclass
with the right methods satisfies them without inheritance. Stores, in
contrast, are ABCs in ``lexindex.stores.base``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from lexindex.embedder import Embedder
    from lexindex.settings import Settings
    from lexindex.stores import ChunkStore, SourceRegistry


@runtime_checkable
class ProviderConfig(Protocol):
    """Protocol for provider configurations.

    Example implementation:
        @dataclass(frozen=True)
        class LiteLLMProvider:
            embedding: str

            def build_embedder(self, settings: Settings) -> Embedder: ...
    """

    def build_embedder(self, settings: Settings) -> Embedder:
        """Build an embedder for chunk and query vectors.

        Args:
            settings: Settings with dimensions, input limit and rate limit policy.
        """
        ...


@runtime_checkable
class StorageConfig(Protocol):
    """Protocol for storage configurations.

    Example implementation:
        @dataclass(frozen=True)
        class LocalStorage:
            data_dir: str

            def build_stores(self) -> tuple[ChunkStore, SourceRegistry]: ...
    """

    def build_stores(self) -> tuple[ChunkStore, SourceRegistry]:
        """Build the storage components.

        Returns:
            Tuple of (chunk_store, source_registry)
        """
        ...
