"""
Read/write lock for in-memory state shared between threads.

Any number of readers may hold the lock at once; a writer holds it alone.
A waiting writer blocks new readers, so a steady stream of readers cannot
starve writers.

Example:
    >>> lock = RWLock()
    >>> with lock.read():
    ...     value = shared["count"]
    >>> with lock.write():
    ...     shared["count"] += 1
"""

import contextlib
import threading
from collections.abc import Generator


class RWLock:
    """Writer-preferring read/write lock built on a single condition variable."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        """Block until no writer holds or waits for the lock, then register a reader."""
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        """Release a previously acquired read lock."""
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError("release_read() called without a matching acquire")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        """Block until there are no readers and no writer, then take the lock."""
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self) -> None:
        """Release the write lock and wake all waiters."""
        with self._cond:
            if not self._writer:
                raise RuntimeError("release_write() called without holding the lock")
            self._writer = False
            self._cond.notify_all()

    @contextlib.contextmanager
    def read(self) -> Generator[None, None, None]:
        """Context manager holding the shared side of the lock."""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextlib.contextmanager
    def write(self) -> Generator[None, None, None]:
        """Context manager holding the exclusive side of the lock."""
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()

    @property
    def readers(self) -> int:
        """Number of readers currently holding the lock."""
        with self._cond:
            return self._readers

    @property
    def locked(self) -> bool:
        """True if a writer currently holds the lock."""
        with self._cond:
            return self._writer
