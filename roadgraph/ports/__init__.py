"""Ports layer - Abstract interfaces (Protocols) for the package.

Ports define the contracts between the route service and the structures
it drives, so each side can be swapped out in tests.
"""

from .cache import CacheKey, CachePort
from .graph import RoadGraphPort

__all__ = [
    # Graph
    "RoadGraphPort",
    # Cache
    "CacheKey",
    "CachePort",
]
