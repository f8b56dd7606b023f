"""Cache port - Injectable path cache abstraction.

Implementations:
- graph/cache.py (PathCache) - Production
- graph/cache.py (NullPathCache) - Testing, or caching disabled by config
"""

from __future__ import annotations

from typing import Any, Dict, Hashable, NamedTuple, Optional, Protocol

from ..domain.models import Algorithm, Path, Point


class CacheKey(NamedTuple):
    """Composite key identifying one memoized path.

    ``end`` is a single Point for point-to-point searches and a tuple of
    stops for tours.
    """

    algorithm: Algorithm
    start: Point
    end: Hashable


class CachePort(Protocol):
    """Port for path caching.

    ``get`` distinguishes a miss (None) from a cached empty path (``()``).
    """

    def get(self, key: CacheKey) -> Optional[Path]:
        """Get a path from the cache.

        Args:
            key: The cache key.

        Returns:
            The cached path, or None if not found.
        """
        ...

    def set(self, key: CacheKey, path: Path) -> None:
        """Store a path in the cache.

        Args:
            key: The cache key.
            path: The path to cache.
        """
        ...

    def __contains__(self, key: object) -> bool: ...

    def clear(self) -> int:
        """Clear all entries from the cache.

        Returns:
            Number of entries that were cleared.
        """
        ...

    def size(self) -> int:
        """Return the number of entries in the cache."""
        ...

    def stats(self) -> Dict[str, Any]:
        """Return hit/miss counts and size."""
        ...
