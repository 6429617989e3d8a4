"""Readers-writer lock for shared translator state.

Lookups vastly outnumber catalog loads in a running application, so readers
share the lock while a catalog load takes it exclusively. Waiting writers
block new readers, otherwise a steady stream of lookups would starve loads.

Limitations:
    - Read locks are reentrant per thread; write locks are not.
    - A thread holding the read lock cannot take the write lock (upgrade) and
      a thread holding the write lock cannot take the read lock (downgrade).
      Both raise RuntimeError instead of deadlocking.

Python 3.13+.
"""

import threading
import time
from collections.abc import Generator
from contextlib import contextmanager

__all__ = ["RWLock"]


class RWLock:
    """Readers-writer lock with writer preference.

    Example:
        >>> lock = RWLock()
        >>> with lock.read():
        ...     pass
        >>> with lock.write(timeout=1.0):
        ...     pass
    """

    __slots__ = ("_condition", "_readers", "_waiting_writers", "_writer")

    def __init__(self) -> None:
        self._condition = threading.Condition(threading.Lock())
        # thread ident -> read acquisition depth
        self._readers: dict[int, int] = {}
        self._writer: int | None = None
        self._waiting_writers = 0

    @contextmanager
    def read(self, timeout: float | None = None) -> Generator[None]:
        """Hold the lock shared.

        Args:
            timeout: Seconds to wait; None waits indefinitely, 0.0 does not wait

        Raises:
            RuntimeError: If the calling thread holds the write lock
            TimeoutError: If the lock is not acquired in time
            ValueError: If timeout is negative
        """
        self._acquire_read(timeout)
        try:
            yield
        finally:
            self._release_read()

    @contextmanager
    def write(self, timeout: float | None = None) -> Generator[None]:
        """Hold the lock exclusively.

        Args:
            timeout: Seconds to wait; None waits indefinitely, 0.0 does not wait

        Raises:
            RuntimeError: If the calling thread already holds the lock
            TimeoutError: If the lock is not acquired in time
            ValueError: If timeout is negative
        """
        self._acquire_write(timeout)
        try:
            yield
        finally:
            self._release_write()

    @staticmethod
    def _deadline(timeout: float | None) -> float | None:
        if timeout is None:
            return None
        if timeout < 0:
            msg = f"Timeout must be non-negative, got {timeout}"
            raise ValueError(msg)
        return time.monotonic() + timeout

    def _wait(self, deadline: float | None, kind: str) -> None:
        """Wait on the condition once; raise when the deadline has passed."""
        if deadline is None:
            self._condition.wait()
            return
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            msg = f"Timed out waiting for {kind} lock"
            raise TimeoutError(msg)
        self._condition.wait(remaining)

    def _acquire_read(self, timeout: float | None) -> None:
        deadline = self._deadline(timeout)
        me = threading.get_ident()
        with self._condition:
            if self._writer == me:
                msg = "Cannot acquire read lock while holding the write lock"
                raise RuntimeError(msg)
            if me in self._readers:
                self._readers[me] += 1
                return
            while self._writer is not None or self._waiting_writers:
                self._wait(deadline, "read")
            self._readers[me] = 1

    def _release_read(self) -> None:
        me = threading.get_ident()
        with self._condition:
            depth = self._readers.get(me)
            if depth is None:
                msg = "Read lock released by a thread that does not hold it"
                raise RuntimeError(msg)
            if depth > 1:
                self._readers[me] = depth - 1
                return
            del self._readers[me]
            if not self._readers:
                self._condition.notify_all()

    def _acquire_write(self, timeout: float | None) -> None:
        deadline = self._deadline(timeout)
        me = threading.get_ident()
        with self._condition:
            if self._writer == me:
                msg = "Write lock is not reentrant"
                raise RuntimeError(msg)
            if me in self._readers:
                msg = "Cannot upgrade a read lock to the write lock"
                raise RuntimeError(msg)
            self._waiting_writers += 1
            try:
                while self._writer is not None or self._readers:
                    self._wait(deadline, "write")
            finally:
                self._waiting_writers -= 1
                # Readers blocked by this writer's preference may proceed now
                # if the wait timed out.
                self._condition.notify_all()
            self._writer = me

    def _release_write(self) -> None:
        with self._condition:
            if self._writer != threading.get_ident():
                msg = "Write lock released by a thread that does not hold it"
                raise RuntimeError(msg)
            self._writer = None
            self._condition.notify_all()
