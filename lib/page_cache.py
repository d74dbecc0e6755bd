# =============================================================================
# lib/page_cache.py - Rendered Page Cache
# =============================================================================
# In-process cache of rendered HTML keyed by URL path.
#
# Pages are regenerated lazily: an entry older than the TTL counts as a miss,
# so the next request renders it again from current data. Writes to content
# call invalidate() for the affected paths so readers see changes right away
# instead of waiting for the TTL.
#
# Usage:
#   cache = PageCache(ttl_seconds=3600)
#   html = cache.get("/blog")
#   if html is None:
#       html = render_listing()
#       cache.set("/blog", html)
# =============================================================================

import logging
import threading
import time
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class CachedPage:
    body: str
    rendered_at: float
    ttl_seconds: int


class PageCache:
    """Thread-safe path -> rendered page map with per-entry TTL."""

    def __init__(self, ttl_seconds: int = 3600, clock=time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._pages: dict[str, CachedPage] = {}
        self._lock = threading.Lock()

    @staticmethod
    def normalize_path(path: str) -> str:
        """'/blog/' and '/blog' are the same page; the root stays '/'."""
        path = "/" + path.strip().lstrip("/")
        return path.rstrip("/") or "/"

    def get(self, path: str) -> str | None:
        """Cached body for `path`, or None when missing or stale."""
        key = self.normalize_path(path)
        with self._lock:
            page = self._pages.get(key)
            if page is None:
                return None
            if self._clock() - page.rendered_at >= page.ttl_seconds:
                del self._pages[key]
                return None
            return page.body

    def set(self, path: str, body: str, ttl_seconds: int | None = None) -> None:
        ttl = self.ttl_seconds if ttl_seconds is None else ttl_seconds
        if ttl <= 0:
            return
        with self._lock:
            self._pages[self.normalize_path(path)] = CachedPage(body, self._clock(), ttl)

    def invalidate(self, path: str) -> bool:
        """Drop one path. Returns True if something was cached."""
        key = self.normalize_path(path)
        with self._lock:
            removed = self._pages.pop(key, None) is not None
        logger.debug(f"Invalidated {key} (cached={removed})")
        return removed

    def clear(self) -> None:
        with self._lock:
            self._pages.clear()

    def __contains__(self, path: str) -> bool:
        return self.get(path) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._pages)
