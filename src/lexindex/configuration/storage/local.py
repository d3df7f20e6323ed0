# src/lexindex/configuration/storage/local.py
"""Local filesystem storage configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lexindex.stores import ChunkStore, SourceRegistry

DB_FILENAME = "lexindex.db"


@dataclass(frozen=True)
class LocalStorage:
    """Local storage in a single SQLite file, ``<data_dir>/lexindex.db``.

    Chunks, vectors, sources and the migration ledger share the file.

    Args:
        data_dir: Directory for the database file. Created if it doesn't exist.
        dimensions: Vector dimensionality the chunk store accepts.

    Example:
        storage = LocalStorage("./lexindex_data")
    """

    data_dir: str
    dimensions: int = 1536

    def build_stores(self) -> tuple[ChunkStore, SourceRegistry]:
        """Build the chunk store and source registry.

        Returns:
            Tuple of (chunk_store, source_registry)
        """
        from lexindex.stores import SQLiteChunkStore, SQLiteSourceRegistry

        Path(self.data_dir).mkdir(parents=True, exist_ok=True)
        db_path = os.path.join(self.data_dir, DB_FILENAME)

        chunk_store = SQLiteChunkStore(db_path, dimensions=self.dimensions)
        source_registry = SQLiteSourceRegistry(db_path)
        return chunk_store, source_registry
