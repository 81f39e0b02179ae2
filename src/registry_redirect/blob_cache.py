"""In-memory cache of blobs known to exist.

The cache only ever records positive results. Presence means the blob was
confirmed to exist at some point; absence means unknown. It is not bounded:
we can afford to store all keys, and the serving process is recycled after
an idle period.
"""

import contextlib
import threading
from typing import Dict, Iterator, Set


class ReadWriteLock:
    """Shared-read / exclusive-write lock.

    Any number of readers may hold the lock together. A writer waits for
    active readers to drain and blocks new readers while it is waiting, so
    a steady stream of lookups cannot starve an insert.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextlib.contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextlib.contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class BlobCache:
    """Bucket -> layer hashes observed to exist.

    Thread-safe. Lookups share the lock, inserts take it exclusively, and
    the lock is only held for the single map access.
    """

    def __init__(self):
        self._cache: Dict[str, Set[str]] = {}
        self._lock = ReadWriteLock()

    def get(self, bucket: str, layer_hash: str) -> bool:
        """Check whether a blob has been recorded as existing.

        Args:
            bucket: Bucket key (cache partition)
            layer_hash: Layer digest within the bucket

        Returns:
            True if previously recorded
        """
        with self._lock.read():
            hashes = self._cache.get(bucket)
            return hashes is not None and layer_hash in hashes

    def put(self, bucket: str, layer_hash: str) -> None:
        """Record that a blob exists. Idempotent."""
        with self._lock.write():
            self._cache.setdefault(bucket, set()).add(layer_hash)

    def __len__(self) -> int:
        with self._lock.read():
            return sum(len(hashes) for hashes in self._cache.values())
