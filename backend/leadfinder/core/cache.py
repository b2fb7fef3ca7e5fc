"""In-process TTL cache shared by the geocoder and the lead service."""

import logging
import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)


class ResultCache:
    """Key/value store with per-entry expiry.

    Values are stored by reference, so callers must treat what they get back
    as immutable. Expired entries are dropped lazily on access and by a sweep
    that ``set`` triggers at most once per ``check_period`` seconds.

    One instance is shared by request threads and the search executor; every
    access to the entry table holds ``_lock``.
    """

    def __init__(
        self,
        default_ttl: int,
        check_period: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if default_ttl <= 0:
            raise ValueError("default_ttl must be positive")
        self.default_ttl = default_ttl
        self.check_period = check_period if check_period is not None else default_ttl * 0.2
        self._clock = clock
        self._entries: Dict[str, Tuple[Any, float]] = {}
        self._lock = threading.RLock()
        self._last_sweep = clock()
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None
            value, expires_at = entry
            if self._clock() >= expires_at:
                self._entries.pop(key, None)
                self._misses += 1
                return None
            self._hits += 1
            return value

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        with self._lock:
            now = self._clock()
            if now - self._last_sweep >= self.check_period:
                self.sweep()
            self._entries[key] = (value, now + (ttl or self.default_ttl))

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def invalidate_all(self) -> None:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        logger.info("Cache invalidated, dropped %d entries", count)

    def sweep(self) -> int:
        with self._lock:
            now = self._clock()
            self._last_sweep = now
            expired = [key for key, (_, expires_at) in list(self._entries.items()) if now >= expires_at]
            for key in expired:
                self._entries.pop(key, None)
        if expired:
            logger.debug("Cache sweep evicted %d entries", len(expired))
        return len(expired)

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {"hits": self._hits, "misses": self._misses, "keys": len(self._entries)}

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
