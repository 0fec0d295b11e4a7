# src/sensei/managers/result_cache_manager.py
import hashlib
import logging
import threading
import time
from typing import Callable, Dict, Optional, Tuple

from sensei.model import SeoReport

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 1800


class ResultCacheManager:
    """
    In-memory cache of finished reports, keyed by source and content digest.
    Entries expire after ``ttl_seconds``; a TTL of 0 disables caching.
    """

    def __init__(self, ttl_seconds: int = DEFAULT_TTL_SECONDS, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, Tuple[float, SeoReport]] = {}
        self._lock = threading.Lock()

    @staticmethod
    def make_key(source_type: str, source: str, html: str) -> str:
        digest = hashlib.sha256(html.encode("utf-8", errors="replace")).hexdigest()
        return f"{source_type}:{source}:{digest}"

    def get(self, key: str) -> Optional[SeoReport]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            stored_at, report = entry
            if self._clock() - stored_at >= self.ttl_seconds:
                del self._entries[key]
                logger.debug("Cache entry expired: %s", key)
                return None
        logger.debug("Cache hit: %s", key)
        return report

    def put(self, key: str, report: SeoReport):
        if self.ttl_seconds <= 0:
            return
        with self._lock:
            now = self._clock()
            self._prune(now)
            self._entries[key] = (now, report)

    def _prune(self, now: float):
        """Drops every expired entry. Caller holds the lock."""
        expired = [k for k, (stored_at, _) in self._entries.items() if now - stored_at >= self.ttl_seconds]
        for k in expired:
            del self._entries[k]
        if expired:
            logger.debug("Pruned %d expired cache entries", len(expired))

    def clear(self):
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
