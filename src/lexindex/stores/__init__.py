# src/lexindex/stores/__init__.py
"""Storage abstractions for LexIndex."""

from lexindex.stores.base import ChunkStore, MigrationLedger, SourceRegistry
from lexindex.stores.migrations import SQLiteMigrationLedger
from lexindex.stores.source_registry import SQLiteSourceRegistry
from lexindex.stores.sqlite_chunk import SQLiteChunkStore

__all__ = [
    "ChunkStore",
    "MigrationLedger",
    "SourceRegistry",
    "SQLiteChunkStore",
    "SQLiteMigrationLedger",
    "SQLiteSourceRegistry",
]
