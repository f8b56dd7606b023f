"""Route service - Algorithm dispatch and route summaries.

This service sits between front-ends and the graph:
1. Pick the search matching the requested algorithm
2. Time the search and count the nodes it processes
3. Turn "no path" into NoRouteFoundError
4. Summarise the route (length, travel time)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Callable, Dict, Hashable, Iterable, Optional, Union

from ..domain.errors import NoRouteFoundError, TourError, UnknownVertexError
from ..domain.models import Algorithm, Path, Point, RouteResult
from ..graph.cache import make_key
from ..monitoring import timed
from ..ports.graph import Observer, RoadGraphPort

Search = Callable[[Point, Point, Optional[Observer]], Optional[Path]]


@dataclass
class RouteService:
    """Computes routes on a road graph with a selectable algorithm.

    Attributes:
        graph: Graph answering the path queries
    """

    graph: RoadGraphPort

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def _searches(self) -> Dict[Algorithm, Search]:
        return {
            Algorithm.BFS: self.graph.bfs,
            Algorithm.DIJKSTRA: self.graph.dijkstra,
            Algorithm.A_STAR: self.graph.a_star_search,
        }

    def find_route(
        self,
        start: Point,
        goal: Point,
        algorithm: Union[Algorithm, str] = Algorithm.A_STAR,
        on_visit: Optional[Observer] = None,
    ) -> RouteResult:
        """Find a route from ``start`` to ``goal``.

        With ``Algorithm.TSP`` the route is the round trip
        start -> goal -> start.

        Args:
            start: The starting point.
            goal: The goal point.
            algorithm: Algorithm tag or its string value (e.g. 'bfs').
            on_visit: Optional hook forwarded to the search.

        Returns:
            RouteResult with the path and its summary.

        Raises:
            NoRouteFoundError: If the goal cannot be reached.
            UnknownVertexError: If start or goal is not in the graph.
            ValueError: If the algorithm tag is unknown.
        """
        algorithm = Algorithm(algorithm)
        if algorithm is Algorithm.TSP:
            return self.plan_tour(start, [goal], on_visit=on_visit)

        self._logger.info(
            "Finding route",
            extra={"algorithm": algorithm.value, "start": str(start), "goal": str(goal)},
        )

        search = self._searches[algorithm]
        return self._run(
            algorithm,
            start,
            goal,
            make_key(algorithm, start, goal),
            lambda observer: search(start, goal, observer),
            on_visit,
        )

    def find_route_safe(
        self,
        start: Point,
        goal: Point,
        algorithm: Union[Algorithm, str] = Algorithm.A_STAR,
        on_visit: Optional[Observer] = None,
    ) -> RouteResult:
        """Find a route, returning an empty result on failure.

        Like find_route(), but returns an empty RouteResult instead of
        raising when there is no path, an endpoint is unknown, or (for
        ``Algorithm.TSP``) the start has no outgoing road.
        """
        algorithm = Algorithm(algorithm)
        try:
            return self.find_route(start, goal, algorithm, on_visit)
        except (NoRouteFoundError, TourError, UnknownVertexError) as e:
            self._logger.debug("Returning empty route", extra={"reason": str(e)})
            return RouteResult(path=(), algorithm=algorithm)

    def plan_tour(
        self,
        start: Point,
        stops: Iterable[Point],
        on_visit: Optional[Observer] = None,
    ) -> RouteResult:
        """Plan a closed tour from ``start`` through ``stops``.

        Raises:
            NoRouteFoundError: If some stop cannot be reached.
            TourError: If ``start`` has no outgoing road.
            UnknownVertexError: If the start or a stop is not in the graph.
        """
        ordered = tuple(dict.fromkeys(p for p in stops if p != start))
        self._logger.info(
            "Planning tour",
            extra={"start": str(start), "stops": len(ordered)},
        )

        result = self._run(
            Algorithm.TSP,
            start,
            start,
            make_key(Algorithm.TSP, start, ordered),
            lambda observer: self.graph.tsp(start, ordered, observer),
            on_visit,
        )
        wanted = set(ordered)
        visiting_order = tuple(p for p in dict.fromkeys(result.path) if p in wanted)
        return replace(result, stops=visiting_order)

    def _run(
        self,
        algorithm: Algorithm,
        start: Point,
        goal: Point,
        key: Hashable,
        search: Callable[[Optional[Observer]], Optional[Path]],
        on_visit: Optional[Observer],
    ) -> RouteResult:
        cache = self.graph.cache
        cached = cache is not None and key in cache
        visited = 0

        def observe(point: Point) -> None:
            nonlocal visited
            visited += 1
            if on_visit is not None:
                on_visit(point)

        with timed(f"{algorithm.value} search") as timing:
            path = search(observe)

        if path is None:
            self._logger.warning(
                "No route found",
                extra={"algorithm": algorithm.value, "start": str(start), "goal": str(goal)},
            )
            raise NoRouteFoundError(
                f"No path from {start} to {goal}",
                start=start,
                goal=goal,
                algorithm=algorithm.value,
            )

        result = RouteResult(
            path=path,
            algorithm=algorithm,
            total_length_km=self.graph.path_length(path),
            total_time_h=self.graph.path_time(path),
            visited=visited,
            duration_s=timing["duration_s"],
            cached=cached,
        )
        self._logger.info(
            "Route found",
            extra={
                "algorithm": algorithm.value,
                "points": result.num_points,
                "visited": visited,
                "cached": cached,
                "time_h": result.total_time_h,
            },
        )
        return result
