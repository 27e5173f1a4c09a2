"""Caller-owned TTL cache for computed snapshots.

The aggregator itself never caches; a host creates one ``SnapshotCache`` and
passes it to whatever needs it.
"""

import logging
import threading
import time
from collections import OrderedDict
from collections.abc import Callable

from hotel_analytics.schemas.analytics import MetricsSnapshot

logger = logging.getLogger(__name__)


class SnapshotCache:
    """Bounded mapping of key -> snapshot whose entries expire after ``ttl_seconds``."""

    def __init__(
        self,
        ttl_seconds: float,
        max_entries: int = 256,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[str, tuple[float, MetricsSnapshot]] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: str) -> MetricsSnapshot | None:
        """Return the cached snapshot, or None if missing or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                logger.debug("Snapshot cache miss for %s", key)
                return None
            expires_at, snapshot = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                logger.debug("Snapshot cache entry %s expired", key)
                return None
            logger.debug("Snapshot cache hit for %s", key)
            return snapshot

    def set(self, key: str, snapshot: MetricsSnapshot) -> None:
        with self._lock:
            self._entries.pop(key, None)
            self._entries[key] = (self._clock() + self.ttl_seconds, snapshot)
            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Evicted snapshot cache entry %s", evicted)

    def invalidate(self, key: str | None = None) -> None:
        """Drop one entry, or every entry when ``key`` is None."""
        with self._lock:
            if key is None:
                self._entries.clear()
            else:
                self._entries.pop(key, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
