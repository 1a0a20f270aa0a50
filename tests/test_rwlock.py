"""Tests for the RWLock guarding the compiled-dictionary cache.

Tests verify:
- Multiple concurrent readers
- Exclusive writer access
- Writer preference over newly arriving readers
- Reentrant read locks
- Upgrade and nested-write rejection

Python 3.13+.
"""

import threading
import time

import pytest

from towerlex.runtime.rwlock import RWLock


class TestRWLockBasics:
    """Test basic RWLock functionality."""

    def test_single_reader(self) -> None:
        """Single reader can acquire lock."""
        lock = RWLock()
        with lock.read():
            assert lock.reader_count == 1
        assert lock.reader_count == 0

    def test_single_writer(self) -> None:
        """Single writer can acquire lock."""
        lock = RWLock()
        with lock.write():
            assert lock.writer_active
        assert not lock.writer_active

    def test_multiple_reads_concurrent(self) -> None:
        """Multiple readers hold the lock at the same time."""
        lock = RWLock()
        barrier = threading.Barrier(4, timeout=5)
        peak: list[int] = []

        def reader() -> None:
            with lock.read():
                barrier.wait()
                peak.append(lock.reader_count)

        threads = [threading.Thread(target=reader) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert max(peak) == 4

    def test_writer_excludes_readers(self) -> None:
        """A reader waits until the writer releases."""
        lock = RWLock()
        writer_in = threading.Event()
        order: list[str] = []

        def writer() -> None:
            with lock.write():
                writer_in.set()
                time.sleep(0.05)
                order.append("writer")

        def reader() -> None:
            writer_in.wait()
            with lock.read():
                order.append("reader")

        threads = [threading.Thread(target=writer), threading.Thread(target=reader)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert order == ["writer", "reader"]


class TestWriterPreference:
    """Test that waiting writers are not starved."""

    def test_waiting_writer_blocks_new_readers(self) -> None:
        """Readers arriving after a waiting writer run after it."""
        lock = RWLock()
        first_reader_in = threading.Event()
        release_first_reader = threading.Event()
        order: list[str] = []

        def first_reader() -> None:
            with lock.read():
                first_reader_in.set()
                release_first_reader.wait(timeout=5)

        def writer() -> None:
            with lock.write():
                order.append("writer")

        def late_reader() -> None:
            with lock.read():
                order.append("late_reader")

        t1 = threading.Thread(target=first_reader)
        t1.start()
        first_reader_in.wait(timeout=5)

        t2 = threading.Thread(target=writer)
        t2.start()
        # Let the writer register as waiting
        time.sleep(0.05)

        t3 = threading.Thread(target=late_reader)
        t3.start()
        time.sleep(0.05)

        release_first_reader.set()
        for thread in (t1, t2, t3):
            thread.join(timeout=5)

        assert order == ["writer", "late_reader"]


class TestReentrancy:
    """Test reentrant and rejected acquisitions."""

    def test_reentrant_read(self) -> None:
        """The same thread may nest read locks."""
        lock = RWLock()
        with lock.read(), lock.read():
            assert lock.reader_count == 1
        assert lock.reader_count == 0

    def test_upgrade_rejected(self) -> None:
        """Read-to-write upgrade raises instead of deadlocking."""
        lock = RWLock()
        with lock.read(), pytest.raises(RuntimeError, match="upgrade"):
            with lock.write():
                pass

    def test_nested_write_rejected(self) -> None:
        """Write locks are not reentrant."""
        lock = RWLock()
        with lock.write(), pytest.raises(RuntimeError, match="already holding"):
            with lock.write():
                pass

    def test_read_inside_write_rejected(self) -> None:
        """A writer cannot take the read lock."""
        lock = RWLock()
        with lock.write(), pytest.raises(RuntimeError, match="holding write lock"):
            with lock.read():
                pass

    def test_lock_usable_after_rejection(self) -> None:
        """A rejected acquisition leaves the lock consistent."""
        lock = RWLock()
        with lock.read(), pytest.raises(RuntimeError):
            with lock.write():
                pass
        with lock.write():
            assert lock.writer_active
