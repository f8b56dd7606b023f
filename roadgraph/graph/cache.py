"""In-memory path caches.

PathCache keeps every successful search result for the lifetime of its
graph: no TTL, no eviction, no size bound. NullPathCache always misses.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, Optional

from ..domain.models import Algorithm, Path, Point
from ..ports.cache import CacheKey


def make_key(algorithm: Algorithm, start: Point, end: Hashable) -> CacheKey:
    """Build the cache key for a query."""
    return CacheKey(algorithm=Algorithm(algorithm), start=start, end=end)


@dataclass
class PathCache:
    """Thread-safe, unbounded path cache.

    This cache implements the CachePort protocol. Paths are stored as
    tuples, so cached values cannot be mutated by callers.

    Attributes:
        name: Cache name for logging

    Example:
        cache = PathCache(name="paths")
        key = make_key(Algorithm.BFS, a, b)
        if (path := cache.get(key)) is None:
            path = compute()
            cache.set(key, path)
    """

    name: str = "paths"

    _store: Dict[CacheKey, Path] = field(default_factory=dict, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    # Statistics
    _hits: int = field(default=0, repr=False)
    _misses: int = field(default=0, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(f"cache.{self.name}")

    def get(self, key: CacheKey) -> Optional[Path]:
        """Get a path from the cache.

        Args:
            key: The cache key.

        Returns:
            The cached path, or None if not found. A cached empty
            path is returned as ``()``.
        """
        with self._lock:
            path = self._store.get(key)
            if path is None:
                self._misses += 1
                return None
            self._hits += 1
            self._logger.debug("Cache hit", extra={"key": key})
            return path

    def set(self, key: CacheKey, path: Path) -> None:
        with self._lock:
            self._store[key] = tuple(path)
            self._logger.debug(
                "Cache entry set",
                extra={"key": key, "points": len(path)},
            )

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._store

    def clear(self) -> int:
        """Clear all entries and statistics.

        Returns:
            Number of entries that were cleared.
        """
        with self._lock:
            count = len(self._store)
            self._store.clear()
            self._hits = 0
            self._misses = 0
            self._logger.info("Cache cleared", extra={"entries_cleared": count})
            return count

    def size(self) -> int:
        with self._lock:
            return len(self._store)

    def stats(self) -> Dict[str, Any]:
        """Return cache statistics.

        Returns:
            Dictionary with hit/miss counts and size.
        """
        with self._lock:
            total = self._hits + self._misses
            hit_rate = (self._hits / total * 100) if total > 0 else 0.0
            return {
                "size": len(self._store),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate_percent": round(hit_rate, 1),
            }

    def keys(self) -> list[CacheKey]:
        with self._lock:
            return list(self._store.keys())


@dataclass
class NullPathCache:
    """No-op cache - always misses.

    Used when caching is disabled in the search config, and in tests
    that must observe every search run.
    """

    name: str = "null"

    def get(self, key: CacheKey) -> Optional[Path]:
        return None

    def set(self, key: CacheKey, path: Path) -> None:
        pass

    def __contains__(self, key: object) -> bool:
        return False

    def clear(self) -> int:
        return 0

    def size(self) -> int:
        return 0

    def stats(self) -> Dict[str, Any]:
        return {
            "size": 0,
            "hits": 0,
            "misses": 0,
            "hit_rate_percent": 0,
        }

    def keys(self) -> list[CacheKey]:
        return []
