# src/lexindex/lexindex.py
"""Central configuration class for LexIndex."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import TYPE_CHECKING, cast

if TYPE_CHECKING:
    from lexindex.chunker import Chunker
    from lexindex.configuration import ProviderConfig, StorageConfig
    from lexindex.embedder import Embedder
    from lexindex.ingestor import Ingestor
    from lexindex.retriever import Retriever
    from lexindex.stores import ChunkStore, SourceRegistry

from lexindex.locks import SourceLocks
from lexindex.settings import Settings


class LexIndex:
    """Central configuration for LexIndex stores and components.

    LexIndex bundles the stores, the embedder and the settings so you can
    configure once and create Ingestors/Retrievers from it. Ingestors created
    by the same instance share per-source locks.

    There are two ways to create a LexIndex instance:

    1. With a storage bundle:

        from lexindex import LexIndex, LiteLLMProvider, LocalStorage

        index = LexIndex(
            provider=LiteLLMProvider(embedding="openai/text-embedding-3-small"),
            storage=LocalStorage("./data"),
        )
        index.ingestor().ingest("wetboek-7", text)

    2. With explicit stores:

        from lexindex.stores import SQLiteChunkStore, SQLiteSourceRegistry

        index = LexIndex.from_stores(
            provider=LiteLLMProvider(embedding="openai/text-embedding-3-small"),
            chunk_store=SQLiteChunkStore("./data/lexindex.db"),
            source_registry=SQLiteSourceRegistry("./data/lexindex.db"),
        )

    Without a provider, ingestion only chunks; sources stay CHUNKED until an
    ingestor with an embedder runs ``embed_pending``.
    """

    def __init__(
        self,
        *,
        provider: ProviderConfig | None = None,
        # EITHER storage bundle...
        storage: StorageConfig | None = None,
        # ...OR explicit stores
        chunk_store: ChunkStore | None = None,
        source_registry: SourceRegistry | None = None,
        # Common
        settings: Settings | None = None,
        chunker: Chunker | None = None,
    ) -> None:
        """Create a LexIndex instance.

        Args:
            provider: Provider configuration that builds the embedder, or None
                      for chunk-only operation.
            storage: Storage bundle. Mutually exclusive with explicit stores.
            chunk_store: Explicit chunk store.
            source_registry: Explicit source registry.
            settings: Behavioral settings (chunk_size, batch_size, default_k, etc.)
            chunker: Custom chunker. Default: HeadingAwareChunker(settings.chunk_size)

        Raises:
            ValueError: If neither storage bundle nor all explicit stores are provided,
                       or if both are provided, or if the provider's vector size
                       differs from the one the chunk store accepts.
        """
        self._settings = settings if settings is not None else Settings()

        if storage is not None:
            if any([chunk_store, source_registry]):
                raise ValueError("Cannot mix 'storage' bundle with explicit stores")
            self.chunk_store, self.source_registry = storage.build_stores()

        elif chunk_store is not None and source_registry is not None:
            self.chunk_store = cast("ChunkStore", chunk_store)
            self.source_registry = cast("SourceRegistry", source_registry)

        else:
            raise ValueError(
                "Must provide either 'storage' bundle or all explicit stores "
                "(chunk_store, source_registry)"
            )

        if provider is not None:
            self._check_dimensions(provider)
        self.embedder: Embedder | None = (
            provider.build_embedder(self._settings) if provider is not None else None
        )
        self._chunker = chunker
        self._locks = SourceLocks()

    @classmethod
    def from_stores(
        cls,
        *,
        chunk_store: ChunkStore,
        source_registry: SourceRegistry,
        provider: ProviderConfig | None = None,
        settings: Settings | None = None,
        chunker: Chunker | None = None,
    ) -> LexIndex:
        """Create LexIndex with explicit stores.

        This is the explicit alternative to using a StorageConfig bundle.
        """
        return cls(
            provider=provider,
            chunk_store=chunk_store,
            source_registry=source_registry,
            settings=settings,
            chunker=chunker,
        )

    @property
    def settings(self) -> Settings:
        return self._settings

    def _check_dimensions(self, provider: ProviderConfig) -> None:
        """Fail fast when every vector the provider returns would be rejected."""
        requested = getattr(provider, "dimensions", None) or self._settings.embedding_dimensions
        accepted = getattr(self.chunk_store, "dimensions", None)
        if accepted is not None and requested != accepted:
            raise ValueError(
                f"Provider requests {requested}-dimensional vectors but the chunk store "
                f"accepts {accepted} dimensions"
            )

    def ingestor(
        self,
        *,
        batch_size: int | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> Ingestor:
        """Create an Ingestor using this instance's stores and embedder.

        Args:
            batch_size: Chunks per embedding request. If None, uses settings default.
            sleep: Sleep function for the inter-batch delay.
        """
        from lexindex.chunker import HeadingAwareChunker
        from lexindex.ingestor import Ingestor

        chunker = self._chunker or HeadingAwareChunker(target_size=self._settings.chunk_size)
        return Ingestor(
            chunk_store=self.chunk_store,
            embedder=self.embedder,
            chunker=chunker,
            source_registry=self.source_registry,
            batch_size=batch_size if batch_size is not None else self._settings.batch_size,
            inter_batch_delay=self._settings.inter_batch_delay_seconds,
            sleep=sleep,
            locks=self._locks,
        )

    def retriever(self, *, default_k: int | None = None) -> Retriever:
        """Create a Retriever using this instance's chunk store and embedder.

        Args:
            default_k: Number of results to return. If None, uses settings default.
        """
        from lexindex.retriever import Retriever

        return Retriever(
            chunk_store=self.chunk_store,
            embedder=self.embedder,
            default_k=default_k if default_k is not None else self._settings.default_k,
        )
