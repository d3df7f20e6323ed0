"""Tests for per-source locks."""

import threading

import pytest

from lexindex.exceptions import IngestionInProgressError
from lexindex.locks import SourceLocks


class TestSourceLocks:
    def test_hold_and_release(self):
        locks = SourceLocks()
        with locks.hold("s1"):
            assert locks.is_locked("s1")
            assert not locks.is_locked("s2")
        assert not locks.is_locked("s1")

    def test_non_blocking_rejects_held_source(self):
        locks = SourceLocks()
        with locks.hold("s1"):
            with pytest.raises(IngestionInProgressError, match="s1"):
                with locks.hold("s1", blocking=False):
                    pass

    def test_other_sources_independent(self):
        locks = SourceLocks()
        with locks.hold("s1"), locks.hold("s2", blocking=False):
            assert locks.is_locked("s2")

    def test_released_on_error(self):
        locks = SourceLocks()
        with pytest.raises(RuntimeError):
            with locks.hold("s1"):
                raise RuntimeError("boom")
        with locks.hold("s1", blocking=False):
            pass

    def test_locks_dropped_when_unused(self):
        locks = SourceLocks()
        for i in range(10):
            with locks.hold(f"s{i}"):
                pass
        assert locks._locks == {}

    def test_blocking_waits(self):
        locks = SourceLocks()
        order = []
        started = threading.Event()

        def second():
            started.set()
            with locks.hold("s1"):
                order.append("second")

        with locks.hold("s1"):
            worker = threading.Thread(target=second)
            worker.start()
            started.wait(timeout=5)
            order.append("first")
        worker.join(timeout=5)

        assert order == ["first", "second"]
