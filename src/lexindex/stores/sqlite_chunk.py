# src/lexindex/stores/sqlite_chunk.py
"""SQLite chunk store with cosine similarity search."""

import heapq
import logging
import sqlite3
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path
from uuid import uuid4

import numpy as np

from lexindex.exceptions import PersistenceError
from lexindex.models import Chunk, ChunkDraft, EmbeddingStats, RetrievedChunk
from lexindex.stores.base import ChunkStore
from lexindex.stores.migrations import Migration, SQLiteMigrationLedger

logger = logging.getLogger(__name__)

# Stay well below SQLITE_MAX_VARIABLE_NUMBER on older builds (999)
MAX_QUERY_PARAMS = 500

_VECTOR_DTYPE = np.dtype("<f4")
_COLUMNS = "id, source_id, chunk_index, content, heading, embedding"


def _create_chunks_table(conn: sqlite3.Connection) -> None:
    conn.execute("""
        CREATE TABLE IF NOT EXISTS chunks (
            id TEXT PRIMARY KEY,
            source_id TEXT NOT NULL,
            chunk_index INTEGER NOT NULL CHECK (chunk_index >= 0),
            content TEXT NOT NULL,
            heading TEXT CHECK (heading IS NULL OR length(heading) <= 200),
            embedding BLOB,
            UNIQUE (source_id, chunk_index)
        )
    """)


def _index_unembedded_chunks(conn: sqlite3.Connection) -> None:
    conn.execute("""
        CREATE INDEX IF NOT EXISTS idx_chunks_unembedded
        ON chunks(source_id, chunk_index) WHERE embedding IS NULL
    """)


CHUNK_MIGRATIONS: list[Migration] = [
    ("0001_create_chunks", _create_chunks_table),
    ("0002_index_unembedded_chunks", _index_unembedded_chunks),
]


class SQLiteChunkStore(ChunkStore):
    """SQLite-based chunk store.

    Vectors are stored as little-endian float32 blobs. Similarity search is
    exact: candidate vectors are loaded and scored with numpy.
    """

    def __init__(self, db_path: str, dimensions: int = 1536, timeout: float = 30.0) -> None:
        """Initialize the SQLite store.

        Args:
            db_path: Path to the SQLite database file
            dimensions: Required length of every embedding vector
            timeout: Seconds to wait for a database lock
        """
        self.db_path = db_path
        self.dimensions = dimensions
        self.timeout = timeout
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self) -> None:
        """Apply pending schema migrations."""
        SQLiteMigrationLedger(self.db_path, timeout=self.timeout).apply(CHUNK_MIGRATIONS)

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """Open a connection that commits on success and rolls back on error."""
        conn = sqlite3.connect(self.db_path, timeout=self.timeout)
        try:
            with conn:
                yield conn
        except sqlite3.Error as e:
            raise PersistenceError(f"Chunk store operation failed: {e}") from e
        finally:
            conn.close()

    def _encode(self, embedding: list[float]) -> bytes:
        vector = np.asarray(embedding, dtype=_VECTOR_DTYPE)
        if vector.shape != (self.dimensions,):
            raise ValueError(
                f"Embedding must have {self.dimensions} dimensions, got shape {vector.shape}"
            )
        if not np.all(np.isfinite(vector)):
            raise ValueError("Embedding contains non-finite values")
        return vector.tobytes()

    @staticmethod
    def _decode(blob: bytes) -> np.ndarray:
        return np.frombuffer(blob, dtype=_VECTOR_DTYPE)

    def _row_to_chunk(self, row: tuple) -> Chunk:
        return Chunk(
            id=row[0],
            source_id=row[1],
            chunk_index=row[2],
            content=row[3],
            heading=row[4],
            embedding=self._decode(row[5]).tolist() if row[5] is not None else None,
        )

    def replace_chunks(self, source_id: str, drafts: list[ChunkDraft]) -> list[Chunk]:
        """Delete the source's chunks and insert the drafts in one transaction."""
        rows = [
            (str(uuid4()), source_id, index, draft.content, draft.heading)
            for index, draft in enumerate(drafts)
        ]
        with self._connect() as conn:
            conn.execute("BEGIN IMMEDIATE")
            deleted = conn.execute("DELETE FROM chunks WHERE source_id = ?", (source_id,)).rowcount
            conn.executemany(
                """
                INSERT INTO chunks (id, source_id, chunk_index, content, heading)
                VALUES (?, ?, ?, ?, ?)
                """,
                rows,
            )
        logger.info(
            "Replaced %d chunks of source %s with %d new chunks", deleted, source_id, len(rows)
        )
        return [
            Chunk(id=row[0], source_id=row[1], chunk_index=row[2], content=row[3], heading=row[4])
            for row in rows
        ]

    def unembedded_chunks(self, source_id: str | None = None) -> list[Chunk]:
        """Chunks without embedding, ordered by (source_id, chunk_index)."""
        sql = f"SELECT {_COLUMNS} FROM chunks WHERE embedding IS NULL"
        params: tuple = ()
        if source_id is not None:
            sql += " AND source_id = ?"
            params = (source_id,)
        sql += " ORDER BY source_id, chunk_index"
        with self._connect() as conn:
            return [self._row_to_chunk(row) for row in conn.execute(sql, params).fetchall()]

    def set_embeddings(self, embeddings: Iterable[tuple[str, list[float]]]) -> int:
        """Attach vectors to chunks in one transaction.

        Raises:
            ValueError: If a vector has the wrong dimension or non-finite values.
                Nothing is written in that case.
        """
        encoded = [(self._encode(embedding), chunk_id) for chunk_id, embedding in embeddings]
        if not encoded:
            return 0
        updated = 0
        with self._connect() as conn:
            for blob, chunk_id in encoded:
                updated += conn.execute(
                    "UPDATE chunks SET embedding = ? WHERE id = ?",
                    (blob, chunk_id),
                ).rowcount
        if updated < len(encoded):
            logger.debug("%d embeddings targeted chunks that no longer exist", len(encoded) - updated)
        return updated

    def query(
        self,
        embedding: list[float],
        candidate_source_ids: Iterable[str],
        top_k: int,
    ) -> list[RetrievedChunk]:
        """Top-k embedded chunks of the candidate sources by cosine similarity.

        Raises:
            ValueError: If the query vector has the wrong dimension or zero length
        """
        source_ids = sorted(set(candidate_source_ids))
        if not source_ids or top_k <= 0:
            return []

        query_vector = np.asarray(embedding, dtype=np.float64)
        if query_vector.shape != (self.dimensions,):
            raise ValueError(
                f"Query must have {self.dimensions} dimensions, got shape {query_vector.shape}"
            )
        query_norm = np.linalg.norm(query_vector)
        if query_norm == 0:
            raise ValueError("Query vector must not be all zeros")

        rows: list[tuple] = []
        with self._connect() as conn:
            for start in range(0, len(source_ids), MAX_QUERY_PARAMS):
                batch = source_ids[start : start + MAX_QUERY_PARAMS]
                placeholders = ",".join("?" * len(batch))
                cursor = conn.execute(
                    f"SELECT {_COLUMNS} FROM chunks "
                    f"WHERE embedding IS NOT NULL AND source_id IN ({placeholders})",
                    batch,
                )
                rows.extend(cursor.fetchall())

        if not rows:
            return []

        matrix = np.vstack([self._decode(row[5]) for row in rows]).astype(np.float64)
        norms = np.linalg.norm(matrix, axis=1)
        with np.errstate(divide="ignore", invalid="ignore"):
            scores = (matrix @ query_vector) / (norms * query_norm)
        scores = np.where(norms > 0, scores, 0.0)

        # Highest score first; equal scores by chunk_index, then source and id
        ranked = heapq.nsmallest(
            top_k,
            range(len(rows)),
            key=lambda i: (-scores[i], rows[i][2], rows[i][1], rows[i][0]),
        )
        return [
            RetrievedChunk(
                chunk_id=rows[i][0],
                source_id=rows[i][1],
                chunk_index=rows[i][2],
                content=rows[i][3],
                heading=rows[i][4],
                score=float(scores[i]),
            )
            for i in ranked
        ]

    def get_by_source(self, source_id: str) -> list[Chunk]:
        """Get all chunks of a source, ordered by chunk_index."""
        with self._connect() as conn:
            cursor = conn.execute(
                f"SELECT {_COLUMNS} FROM chunks WHERE source_id = ? ORDER BY chunk_index",
                (source_id,),
            )
            return [self._row_to_chunk(row) for row in cursor.fetchall()]

    def delete_by_source(self, source_id: str) -> int:
        """Delete all chunks of a source."""
        with self._connect() as conn:
            return conn.execute("DELETE FROM chunks WHERE source_id = ?", (source_id,)).rowcount

    def list_sources(self) -> list[str]:
        """List all source ids that have chunks."""
        with self._connect() as conn:
            cursor = conn.execute("SELECT DISTINCT source_id FROM chunks ORDER BY source_id")
            return [row[0] for row in cursor.fetchall()]

    def count_chunks(self) -> int:
        """Count the total number of chunks in the store."""
        with self._connect() as conn:
            count = conn.execute("SELECT COUNT(id) FROM chunks").fetchone()
            return count[0] if count else 0

    def embedding_stats(self, source_ids: Iterable[str] | None = None) -> EmbeddingStats:
        """Count chunks with and without embedding."""
        with self._connect() as conn:
            if source_ids is None:
                total, with_embedding = conn.execute(
                    "SELECT COUNT(id), COUNT(embedding) FROM chunks"
                ).fetchone()
                return EmbeddingStats(total=total, with_embedding=with_embedding)

            ids = sorted(set(source_ids))
            total = with_embedding = 0
            for start in range(0, len(ids), MAX_QUERY_PARAMS):
                batch = ids[start : start + MAX_QUERY_PARAMS]
                placeholders = ",".join("?" * len(batch))
                batch_total, batch_embedded = conn.execute(
                    f"SELECT COUNT(id), COUNT(embedding) FROM chunks WHERE source_id IN ({placeholders})",
                    batch,
                ).fetchone()
                total += batch_total
                with_embedding += batch_embedded
            return EmbeddingStats(total=total, with_embedding=with_embedding)
