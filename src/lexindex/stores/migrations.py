# src/lexindex/stores/migrations.py
"""Persisted migration ledger for SQLite stores.

Schema changes run once per database file. Completion is recorded in a
``schema_migrations`` table inside the same transaction as the change,
so a restart or a second process never re-runs a finished migration.
"""

import logging
import sqlite3
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from datetime import UTC, datetime

from lexindex.exceptions import PersistenceError
from lexindex.stores.base import MigrationLedger

logger = logging.getLogger(__name__)

Migration = tuple[str, Callable[[sqlite3.Connection], None]]


class SQLiteMigrationLedger(MigrationLedger):
    """SQLite-backed migration ledger."""

    def __init__(self, db_path: str, timeout: float = 30.0) -> None:
        self._db_path = db_path
        self._timeout = timeout
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS schema_migrations (
                    name TEXT PRIMARY KEY,
                    applied_at TEXT NOT NULL
                )
            """)

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self._db_path, timeout=self._timeout)
        try:
            with conn:
                yield conn
        except sqlite3.Error as e:
            raise PersistenceError(f"Migration ledger operation failed: {e}") from e
        finally:
            conn.close()

    def is_applied(self, name: str) -> bool:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT 1 FROM schema_migrations WHERE name = ?",
                (name,),
            ).fetchone()
            return row is not None

    def applied(self) -> list[str]:
        with self._connect() as conn:
            cursor = conn.execute("SELECT name FROM schema_migrations ORDER BY applied_at, name")
            return [row[0] for row in cursor.fetchall()]

    def apply(self, migrations: Sequence[Migration]) -> list[str]:
        """Run pending migrations in order. Returns the names that ran now.

        Each migration and its ledger row commit together; BEGIN IMMEDIATE
        keeps concurrent processes from running the same one twice.
        """
        ran = []
        for name, migrate in migrations:
            conn = sqlite3.connect(self._db_path, timeout=self._timeout, isolation_level=None)
            try:
                conn.execute("BEGIN IMMEDIATE")
                done = conn.execute(
                    "SELECT 1 FROM schema_migrations WHERE name = ?",
                    (name,),
                ).fetchone()
                if done is None:
                    migrate(conn)
                    conn.execute(
                        "INSERT INTO schema_migrations (name, applied_at) VALUES (?, ?)",
                        (name, datetime.now(UTC).isoformat()),
                    )
                    ran.append(name)
                conn.execute("COMMIT")
            except sqlite3.Error as e:
                if conn.in_transaction:
                    conn.execute("ROLLBACK")
                raise PersistenceError(f"Migration '{name}' failed: {e}") from e
            finally:
                conn.close()
        if ran:
            logger.info("Applied migrations to %s: %s", self._db_path, ", ".join(ran))
        return ran
