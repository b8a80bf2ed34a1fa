"""
Readers-writer lock guarding the tag store.

Any number of readers may hold the lock together; a writer holds it alone.
Waiting writers block new readers so a steady stream of queries cannot
starve mutations. Every acquisition is bounded by a timeout and raises
``LockAcquisitionError`` instead of waiting forever.
"""

from __future__ import annotations

import logging
import threading
import time
from contextlib import contextmanager
from typing import Iterator

from mediatag.exceptions import LockAcquisitionError

logger = logging.getLogger(__name__)


class ReadWriteLock:
    """Shared/exclusive lock built on a single condition variable."""

    def __init__(self, timeout: float = 5.0) -> None:
        self._timeout = timeout
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def _wait_for(self, predicate, kind: str) -> None:
        deadline = time.monotonic() + self._timeout
        while not predicate():
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                logger.warning("Timed out waiting %.2fs for %s lock", self._timeout, kind)
                raise LockAcquisitionError(
                    f"Timed out acquiring {kind} lock after {self._timeout:.2f}s",
                    timeout=self._timeout,
                )
            self._cond.wait(remaining)

    @contextmanager
    def read(self) -> Iterator[None]:
        """Hold the lock in shared mode for the duration of the block."""
        with self._cond:
            self._wait_for(
                lambda: not self._writer and self._writers_waiting == 0, "read"
            )
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        """Hold the lock exclusively for the duration of the block."""
        with self._cond:
            self._writers_waiting += 1
            try:
                self._wait_for(lambda: not self._writer and self._readers == 0, "write")
            finally:
                self._writers_waiting -= 1
                # readers parked behind this writer must re-check on timeout
                self._cond.notify_all()
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()
