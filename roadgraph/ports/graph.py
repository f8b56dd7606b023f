"""Graph port - Abstraction for route queries.

The route service depends on this protocol rather than on RoadGraph, so
it can be driven by any structure offering the same searches.
Implementation: graph/road_graph.py
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional, Protocol, Sequence

from ..domain.models import Path, Point
from .cache import CachePort

Observer = Callable[[Point], None]


class RoadGraphPort(Protocol):
    """Port for path queries on a road network.

    Every search returns the points from start to goal inclusive, or
    None when the goal cannot be reached.
    """

    cache: Optional[CachePort]

    def bfs(
        self, start: Point, goal: Point, on_visit: Optional[Observer] = None
    ) -> Optional[Path]: ...

    def dijkstra(
        self, start: Point, goal: Point, on_visit: Optional[Observer] = None
    ) -> Optional[Path]: ...

    def a_star_search(
        self, start: Point, goal: Point, on_visit: Optional[Observer] = None
    ) -> Optional[Path]: ...

    def tsp(
        self,
        start: Point,
        stops: Iterable[Point],
        on_visit: Optional[Observer] = None,
    ) -> Optional[Path]:
        """Plan a closed tour from start through every stop and back."""
        ...

    def path_length(self, path: Sequence[Point]) -> float:
        """Total length in km of a path."""
        ...

    def path_time(self, path: Sequence[Point]) -> float:
        """Total travel time in hours of a path."""
        ...
