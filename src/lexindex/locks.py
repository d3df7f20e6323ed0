# src/lexindex/locks.py
"""Per-source locks serialising re-ingestion of the same source."""

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from lexindex.exceptions import IngestionInProgressError


class SourceLocks:
    """One lock per source id, created on demand.

    Different sources never contend. Locks are dropped once no holder or
    waiter remains, so the map does not grow with the number of sources.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}
        self._users: dict[str, int] = {}

    @contextmanager
    def hold(self, source_id: str, blocking: bool = True) -> Iterator[None]:
        """Hold the source's lock for the duration of the block.

        Raises:
            IngestionInProgressError: If blocking is False and the lock is taken
        """
        with self._guard:
            lock = self._locks.setdefault(source_id, threading.Lock())
            self._users[source_id] = self._users.get(source_id, 0) + 1
        try:
            if not lock.acquire(blocking=blocking):
                raise IngestionInProgressError(source_id)
            try:
                yield
            finally:
                lock.release()
        finally:
            with self._guard:
                self._users[source_id] -= 1
                if self._users[source_id] == 0:
                    del self._users[source_id]
                    del self._locks[source_id]

    def is_locked(self, source_id: str) -> bool:
        with self._guard:
            lock = self._locks.get(source_id)
            return lock is not None and lock.locked()
