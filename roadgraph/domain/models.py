"""Immutable domain models for the road graph.

All models are frozen dataclasses with slots. Points are supplied by
callers (typically a map loader); the core only compares and hashes them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple


class Algorithm(str, Enum):
    """Search algorithm tag.

    The value doubles as the cache key prefix, so two algorithms never
    share cached paths.
    """

    BFS = "bfs"
    DIJKSTRA = "dijkstra"
    A_STAR = "a_star"
    TSP = "tsp"


@dataclass(frozen=True, slots=True)
class Point:
    """A 2-D coordinate identifying a road intersection.

    With the great-circle metric ``x`` is read as latitude and ``y`` as
    longitude.
    """

    x: float
    y: float

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


Path = Tuple[Point, ...]


@dataclass(frozen=True, slots=True)
class RouteResult:
    """Result of a route computation.

    Attributes:
        path: Ordered points from start to goal (inclusive)
        algorithm: Algorithm that produced the path
        total_length_km: Sum of the lengths of the traversed edges
        total_time_h: Sum of the travel times of the traversed edges
        visited: Number of nodes the search processed (0 when cached)
        duration_s: Wall-clock time spent computing the route
        cached: Whether the path was served from the path cache
        stops: Tour stops in visiting order, for tours only
    """

    path: Path
    algorithm: Algorithm
    total_length_km: float = 0.0
    total_time_h: float = 0.0
    visited: int = 0
    duration_s: float = 0.0
    cached: bool = False
    stops: Path = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        """Check if no route was found."""
        return len(self.path) == 0

    @property
    def num_points(self) -> int:
        return len(self.path)
