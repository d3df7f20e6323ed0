# src/lexindex/stores/source_registry.py
"""SQLite implementation of the source registry."""

import hashlib
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from pathlib import Path

from lexindex.exceptions import PersistenceError
from lexindex.models import Source
from lexindex.stores.base import SourceRegistry
from lexindex.stores.migrations import Migration, SQLiteMigrationLedger


def _create_sources_table(conn: sqlite3.Connection) -> None:
    conn.execute("""
        CREATE TABLE IF NOT EXISTS sources (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL DEFAULT '',
            content TEXT,
            content_hash TEXT,
            updated_at TEXT NOT NULL
        )
    """)


SOURCE_MIGRATIONS: list[Migration] = [
    ("0001_create_sources", _create_sources_table),
]


def content_hash(content: str) -> str:
    """sha256 hex digest of the content."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


class SQLiteSourceRegistry(SourceRegistry):
    """SQLite-backed source registry."""

    def __init__(self, db_path: str, timeout: float = 30.0) -> None:
        """Initialize the registry.

        Args:
            db_path: Path to SQLite database file
            timeout: Seconds to wait for a database lock
        """
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._db_path = db_path
        self._timeout = timeout
        SQLiteMigrationLedger(db_path, timeout=timeout).apply(SOURCE_MIGRATIONS)

    @contextmanager
    def _connect(self, action: str) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self._db_path, timeout=self._timeout)
        try:
            with conn:
                yield conn
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to {action}: {e}") from e
        finally:
            conn.close()

    def put(self, source: Source) -> Source:
        """Store or update a source, computing its content hash."""
        stored = source.model_copy(
            update={
                "content_hash": content_hash(source.content) if source.content is not None else None,
                "updated_at": datetime.now(UTC),
            }
        )
        with self._connect(f"store source '{source.id}'") as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO sources (id, name, content, content_hash, updated_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    stored.id,
                    stored.name,
                    stored.content,
                    stored.content_hash,
                    stored.updated_at.isoformat(),
                ),
            )
        return stored

    def get(self, source_id: str) -> Source | None:
        """Get a source by id, or None if not tracked."""
        with self._connect(f"read source '{source_id}'") as conn:
            row = conn.execute(
                "SELECT id, name, content, content_hash, updated_at FROM sources WHERE id = ?",
                (source_id,),
            ).fetchone()
        if row is None:
            return None
        return Source(
            id=row[0],
            name=row[1],
            content=row[2],
            content_hash=row[3],
            updated_at=datetime.fromisoformat(row[4]),
        )

    def delete(self, source_id: str) -> None:
        """Remove a source."""
        with self._connect(f"delete source '{source_id}'") as conn:
            conn.execute("DELETE FROM sources WHERE id = ?", (source_id,))

    def list_sources(self) -> list[str]:
        """List all tracked source ids."""
        with self._connect("list sources") as conn:
            cursor = conn.execute("SELECT id FROM sources ORDER BY id")
            return [row[0] for row in cursor.fetchall()]
