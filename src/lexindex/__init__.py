"""LexIndex - heading-aware chunking and vector retrieval for legal sources.

Splits long legal and regulatory texts into heading-aligned chunks, embeds
them in rate-limited batches and answers top-k similarity queries restricted
to a caller-chosen set of sources.

Quick Start (LiteLLM + Local Storage):
    from lexindex import LexIndex, LiteLLMProvider, LocalStorage

    index = LexIndex(
        provider=LiteLLMProvider(embedding="openai/text-embedding-3-small"),
        storage=LocalStorage("./data"),
    )

    # Ingest a source
    result = index.ingestor().ingest("bw-boek-7", text)

    # Query within a set of sources
    hits = index.retriever().search("opzegtermijn werkgever", ["bw-boek-7"])
"""

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("lexindex")
except PackageNotFoundError:
    # Development / source-tree fallback (e.g. running tests without installing the wheel).
    try:
        import tomllib
        from pathlib import Path

        def _read_version_from_pyproject() -> str | None:
            for parent in Path(__file__).resolve().parents:
                pyproject = parent / "pyproject.toml"
                if pyproject.exists():
                    data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
                    version = data.get("project", {}).get("version")
                    return str(version) if version is not None else None
            return None

        __version__ = _read_version_from_pyproject() or "unknown"
    except Exception:
        __version__ = "unknown"

# Chunking
from lexindex.chunker import Chunker, HeadingAwareChunker, HeadingDetector, HeadingRule

# Configuration objects
from lexindex.configuration import (
    LiteLLMProvider,
    LocalStorage,
    ProviderConfig,
    StorageConfig,
)
from lexindex.embedder import ClientEmbedder, Embedder

# Errors
from lexindex.exceptions import (
    ChunkingDegradation,
    EmbeddingError,
    EmbeddingProviderError,
    IngestionInProgressError,
    LexIndexError,
    PersistenceError,
    RateLimitError,
)

# Pipelines
from lexindex.ingestor import Ingestor, ProgressCallback

# Central configuration
from lexindex.lexindex import LexIndex

# Core models
from lexindex.models import (
    Chunk,
    ChunkDraft,
    EmbeddingRunResult,
    EmbeddingStats,
    IngestResult,
    RetrievedChunk,
    Source,
    SourceStatus,
)

# Provider ABCs
from lexindex.providers import EmbeddingClient, LiteLLMEmbeddingClient
from lexindex.retriever import Retriever
from lexindex.settings import Settings

# Storage
from lexindex.stores import (
    ChunkStore,
    SourceRegistry,
    SQLiteChunkStore,
    SQLiteSourceRegistry,
)

__all__ = [
    # Version
    "__version__",
    # Models
    "Chunk",
    "ChunkDraft",
    "EmbeddingRunResult",
    "EmbeddingStats",
    "IngestResult",
    "RetrievedChunk",
    "Source",
    "SourceStatus",
    # Config
    "Settings",
    # Configuration objects
    "ProviderConfig",
    "StorageConfig",
    "LiteLLMProvider",
    "LocalStorage",
    # Storage
    "ChunkStore",
    "SourceRegistry",
    "SQLiteChunkStore",
    "SQLiteSourceRegistry",
    # Chunking
    "Chunker",
    "HeadingAwareChunker",
    "HeadingDetector",
    "HeadingRule",
    # Embedding
    "Embedder",
    "ClientEmbedder",
    "EmbeddingClient",
    "LiteLLMEmbeddingClient",
    # Errors
    "LexIndexError",
    "ChunkingDegradation",
    "EmbeddingError",
    "EmbeddingProviderError",
    "RateLimitError",
    "PersistenceError",
    "IngestionInProgressError",
    # Pipelines
    "Ingestor",
    "ProgressCallback",
    "Retriever",
    # Central configuration
    "LexIndex",
]
