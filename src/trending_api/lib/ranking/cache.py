"""Short-lived cache for ranked feed payloads.

Entries are immutable ``(stored_at, payload)`` records.  A ``put`` always
replaces the whole entry, and a ``get`` only serves an entry younger than the
TTL; older entries are treated as a miss and dropped on the spot.

All operations are plain dict reads and writes with no awaits, so on a single
event loop no lock is needed.  Two concurrent misses for the same key may
both recompute and both ``put``; the last writer wins.
"""

import logging
import time
from collections.abc import Callable
from typing import Any, NamedTuple

logger = logging.getLogger(__name__)

CACHE_TTL_SECONDS = 60.0


class CacheEntry(NamedTuple):
    stored_at: float
    payload: Any


class ResultCache:
    """Key -> payload map with a fixed time-to-live.

    ``clock`` returns seconds on a monotonic scale; tests inject a fake one.
    """

    def __init__(
        self,
        ttl_seconds: float = CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def _is_fresh(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.stored_at < self.ttl_seconds

    def get(self, key: str) -> Any | None:
        """Return the cached payload for ``key``, or ``None`` on a miss."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if not self._is_fresh(entry, self._clock()):
            # Only drop the entry we looked at; a newer put may have replaced it.
            if self._entries.get(key) is entry:
                del self._entries[key]
            return None
        return entry.payload

    def put(self, key: str, payload: Any) -> None:
        self._entries[key] = CacheEntry(stored_at=self._clock(), payload=payload)

    def sweep(self) -> int:
        """Remove expired entries and return how many were removed."""
        now = self._clock()
        expired = [
            key for key, entry in list(self._entries.items())
            if not self._is_fresh(entry, now)
        ]
        for key in expired:
            self._entries.pop(key, None)
        if expired:
            logger.debug("Swept %d expired feed cache entries", len(expired))
        return len(expired)
