"""Directed road network graph.

Intersections are vertices keyed by Point, road segments are directed
edges weighted by travel time. Vertices and edges are inserted by a
loader before any query runs; searches then read the structure without
modifying it and memoize every path they find.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Callable, Dict, FrozenSet, Iterable, Optional, Sequence, Tuple

from ..config import SearchConfig, get_config
from ..domain.errors import (
    ConfigurationError,
    InvalidEdgeError,
    TourError,
    UnknownVertexError,
)
from ..domain.models import Algorithm, Path, Point
from ..domain.speeds import DEFAULT_SPEED_TABLE, SpeedTable
from ..ports.cache import CachePort
from .cache import NullPathCache, PathCache, make_key
from .node import Edge, Node
from .search import (
    DISTANCE_METRICS,
    DistanceMetric,
    Observer,
    SearchOutcome,
    a_star,
    breadth_first,
    dijkstra,
    fastest_paths,
    straight_line_heuristic,
)
from .tsp import plan_tour


@dataclass
class RoadGraph:
    """A graph of road intersections connected by directed road segments.

    Search state is allocated per call, so independent queries on a graph
    that is no longer being mutated do not interfere with each other.

    Attributes:
        speed_table: Road-type speeds used to derive edge travel times
        config: Search configuration (heuristic metric, caching, 2-opt)
        cache: Path cache; defaults to PathCache, or NullPathCache when
            caching is disabled in the config
    """

    speed_table: SpeedTable = DEFAULT_SPEED_TABLE
    config: SearchConfig = field(default_factory=lambda: get_config().search)
    cache: Optional[CachePort] = None

    _nodes: Dict[Point, Node] = field(default_factory=dict, repr=False)
    _time_per_distance: float = field(default=math.inf, init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        if self.cache is None:
            self.cache = PathCache() if self.config.cache_enabled else NullPathCache()

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    def add_vertex(self, point: Point) -> bool:
        """Add an intersection at ``point``.

        Returns:
            True if a new vertex was inserted, False if the point was
            already in the graph (the graph is then left unchanged).
        """
        if point in self._nodes:
            return False

        self._nodes[point] = Node(point)
        return True

    def add_edge(
        self,
        start: Point,
        end: Point,
        road_name: str,
        road_type: str,
        length: float,
    ) -> Edge:
        """Add a directed road segment from ``start`` to ``end``.

        Args:
            start: Registered vertex the segment leaves from.
            end: Registered vertex the segment leads to.
            road_name: Street name.
            road_type: Road classification, looked up in the speed table.
            length: Segment length in km.

        Returns:
            The inserted edge.

        Raises:
            UnknownVertexError: If either endpoint is not a vertex.
            InvalidEdgeError: If the length is negative or not finite.
        """
        self._require_vertex(start, "start")
        self._require_vertex(end, "end")

        edge = Edge.create(start, end, road_name, road_type, length, self.speed_table)
        self._nodes[start].add_edge(edge)

        distance = self._distance_metric()(start, end)
        if distance > 0:
            self._time_per_distance = min(self._time_per_distance, edge.time / distance)
        return edge

    @property
    def heuristic_scale(self) -> float:
        """Smallest travel time per unit of straight-line distance over all edges.

        Edges whose endpoints coincide under the distance metric are
        ignored; 0.0 when no other edge exists.
        """
        if math.isinf(self._time_per_distance):
            return 0.0
        return self._time_per_distance

    def vertex_count(self) -> int:
        return len(self._nodes)

    def edge_count(self) -> int:
        return sum(node.out_degree for node in self._nodes.values())

    def vertices(self) -> FrozenSet[Point]:
        return frozenset(self._nodes)

    def edges_from(self, point: Point) -> Tuple[Edge, ...]:
        """Outgoing edges of ``point``, in insertion order."""
        self._require_vertex(point, "point")
        return tuple(self._nodes[point].edges)

    def neighbours(self, point: Point) -> Tuple[Point, ...]:
        self._require_vertex(point, "point")
        return self._nodes[point].neighbours()

    def __contains__(self, point: object) -> bool:
        return point in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def path_length(self, path: Sequence[Point]) -> float:
        """Total length in km of a path, following the fastest edge per hop."""
        return sum(edge.length for edge in self._path_edges(path))

    def path_time(self, path: Sequence[Point]) -> float:
        """Total travel time in hours of a path, following the fastest edge per hop."""
        return sum(edge.time for edge in self._path_edges(path))

    def _path_edges(self, path: Sequence[Point]) -> Iterable[Edge]:
        for a, b in zip(path, path[1:]):
            candidates = [edge for edge in self.edges_from(a) if edge.end == b]
            if not candidates:
                raise InvalidEdgeError(f"No edge from {a} to {b}", start=a, end=b)
            yield min(candidates, key=lambda edge: edge.time)

    def _require_vertex(self, point: Point, role: str) -> None:
        if point not in self._nodes:
            raise UnknownVertexError(
                f"{role.capitalize()} point {point} is not a vertex of the graph",
                point=point,
            )

    # ------------------------------------------------------------------
    # Searches
    # ------------------------------------------------------------------

    def bfs(
        self, start: Point, goal: Point, on_visit: Optional[Observer] = None
    ) -> Optional[Path]:
        """Find the path with the fewest edges from ``start`` to ``goal``.

        Args:
            start: The starting intersection.
            goal: The goal intersection.
            on_visit: Optional hook called with each point as it is dequeued.

        Returns:
            Points from start to goal inclusive, or None if no path exists.
        """
        return self._search(
            Algorithm.BFS,
            start,
            goal,
            on_visit,
            lambda: breadth_first(self._nodes, start, goal, on_visit),
        )

    def dijkstra(
        self, start: Point, goal: Point, on_visit: Optional[Observer] = None
    ) -> Optional[Path]:
        """Find the fastest path from ``start`` to ``goal`` using Dijkstra.

        Args:
            start: The starting intersection.
            goal: The goal intersection.
            on_visit: Optional hook called with each point as it is settled.

        Returns:
            Points from start to goal inclusive, or None if no path exists.
        """
        return self._search(
            Algorithm.DIJKSTRA,
            start,
            goal,
            on_visit,
            lambda: dijkstra(self._nodes, start, goal, on_visit),
        )

    def a_star_search(
        self, start: Point, goal: Point, on_visit: Optional[Observer] = None
    ) -> Optional[Path]:
        """Find the fastest path from ``start`` to ``goal`` using A*.

        Args:
            start: The starting intersection.
            goal: The goal intersection.
            on_visit: Optional hook called with each point as it is settled.

        Returns:
            Points from start to goal inclusive, or None if no path exists.
        """
        heuristic = straight_line_heuristic(
            goal, self._distance_metric(), self.heuristic_scale
        )
        return self._search(
            Algorithm.A_STAR,
            start,
            goal,
            on_visit,
            lambda: a_star(self._nodes, start, goal, heuristic, on_visit),
        )

    def fastest_paths(
        self,
        start: Point,
        targets: Iterable[Point],
        on_visit: Optional[Observer] = None,
    ) -> Dict[Point, Tuple[Path, float]]:
        """Fastest paths from ``start`` to several targets with one Dijkstra run.

        Results are not cached. Unreachable targets are left out.

        Raises:
            UnknownVertexError: If the start or a target is not a vertex.
        """
        targets = tuple(targets)
        self._require_vertex(start, "start")
        for target in targets:
            self._require_vertex(target, "target")
        return fastest_paths(self._nodes, start, targets, on_visit)

    def tsp(
        self,
        start: Point,
        stops: Iterable[Point],
        on_visit: Optional[Observer] = None,
    ) -> Optional[Path]:
        """Plan a closed tour from ``start`` through every stop and back.

        The tour is built nearest-neighbour first and then improved with
        2-opt, so it is short but not guaranteed optimal. Legs are fastest
        paths from one single-source Dijkstra run per tour point;
        ``on_visit`` sees the settled nodes of every run.

        Returns:
            Points from start back to start, or None if a stop cannot be
            reached or cannot reach the next one.

        Raises:
            TourError: If ``start`` has no outgoing edge.
            UnknownVertexError: If the start or a stop is not a vertex.
        """
        ordered = tuple(dict.fromkeys(p for p in stops if p != start))
        self._require_vertex(start, "start")
        for stop in ordered:
            self._require_vertex(stop, "stop")
        if self._nodes[start].out_degree == 0:
            raise TourError(f"Start point {start} has no outgoing road", start=start)

        key = make_key(Algorithm.TSP, start, ordered)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        tour = plan_tour(
            self, start, ordered, on_visit, max_passes=self.config.two_opt_max_passes
        )
        if tour is None:
            self._logger.debug(
                "No tour found",
                extra={"start": str(start), "stops": len(ordered)},
            )
            return None

        self.cache.set(key, tour.path)
        return tour.path

    def _search(
        self,
        algorithm: Algorithm,
        start: Point,
        goal: Point,
        on_visit: Optional[Observer],
        run: Callable[[], SearchOutcome],
    ) -> Optional[Path]:
        self._require_vertex(start, "start")
        self._require_vertex(goal, "goal")

        key = make_key(algorithm, start, goal)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        outcome = run()
        self._logger.debug(
            "Search finished",
            extra={
                "algorithm": algorithm.value,
                "start": str(start),
                "goal": str(goal),
                "found": outcome.found,
                "settled": len(outcome.settled),
                "cost": outcome.cost,
            },
        )

        if outcome.path is None:
            return None

        self.cache.set(key, outcome.path)
        return outcome.path

    def _distance_metric(self) -> DistanceMetric:
        metric = DISTANCE_METRICS.get(self.config.distance_metric)
        if metric is None:
            raise ConfigurationError(
                f"Unknown distance metric: {self.config.distance_metric}",
                setting_name="distance_metric",
                expected_type=" or ".join(sorted(DISTANCE_METRICS)),
            )
        return metric
