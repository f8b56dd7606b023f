"""Path search over road graph nodes.

Three algorithms share one contract: they take the node mapping, a
start and a goal, and an optional ``on_visit`` observer called once per
node as it is processed. They return a SearchOutcome whose ``path`` is
None when the goal is unreachable.

Dijkstra and A* use a binary heap with duplicate pushes and lazy
deletion: a node may sit in the heap several times, only the first pop
settles it and later copies are discarded. Tentative distances and
heuristic estimates are held in a side table built for each call, so
searches never see state left over from an earlier run.

``fastest_paths`` is the single-source variant used for tour legs.
"""

from __future__ import annotations

import heapq
import itertools
import math
from collections import deque
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from geopy.distance import great_circle

from ..domain.models import Path, Point
from .node import Node


Observer = Callable[[Point], None]
Heuristic = Callable[[Point], float]
DistanceMetric = Callable[[Point, Point], float]


@dataclass(frozen=True, slots=True)
class SearchOutcome:
    """Result of a single search run.

    Attributes:
        path: Points from start to goal inclusive, or None if unreachable
        cost: Edge count (BFS) or travel time in hours (Dijkstra, A*)
        settled: Nodes in the order they were processed
    """

    path: Optional[Path]
    cost: float
    settled: Tuple[Point, ...]

    @property
    def found(self) -> bool:
        return self.path is not None


def euclidean_distance(a: Point, b: Point) -> float:
    return math.hypot(b.x - a.x, b.y - a.y)


def great_circle_distance(a: Point, b: Point) -> float:
    """Great-circle distance in km, reading x as latitude and y as longitude."""
    return great_circle((a.x, a.y), (b.x, b.y)).km


DISTANCE_METRICS: Dict[str, DistanceMetric] = {
    "euclidean": euclidean_distance,
    "great_circle": great_circle_distance,
}


def straight_line_heuristic(
    goal: Point, metric: DistanceMetric, scale: float
) -> Heuristic:
    """Lower bound on the travel time from a point to ``goal``.

    ``scale`` must not exceed ``edge.time / metric(edge.start, edge.end)``
    for any edge of the graph. The estimate is then admissible and, since
    the metric obeys the triangle inequality, consistent.
    """

    def estimate(point: Point) -> float:
        return scale * metric(point, goal)

    return estimate


def reconstruct_path(parents: Mapping[Point, Point], start: Point, goal: Point) -> Path:
    """Walk parent links back from ``goal`` to ``start``."""
    path: List[Point] = [goal]
    current = goal
    while current != start:
        current = parents[current]
        path.append(current)
    path.reverse()
    return tuple(path)


def breadth_first(
    nodes: Mapping[Point, Node],
    start: Point,
    goal: Point,
    on_visit: Optional[Observer] = None,
) -> SearchOutcome:
    """Fewest-edges path from ``start`` to ``goal``.

    A node is marked discovered, and its parent recorded, when it is
    enqueued, so it is enqueued at most once.
    """
    frontier = deque([start])
    discovered = {start}
    parents: Dict[Point, Point] = {}
    settled: List[Point] = []

    while frontier:
        current = frontier.popleft()
        settled.append(current)
        if on_visit is not None:
            on_visit(current)

        if current == goal:
            path = reconstruct_path(parents, start, goal)
            return SearchOutcome(path=path, cost=float(len(path) - 1), settled=tuple(settled))

        for edge in nodes[current].edges:
            if edge.end not in discovered:
                discovered.add(edge.end)
                parents[edge.end] = current
                frontier.append(edge.end)

    return SearchOutcome(path=None, cost=math.inf, settled=tuple(settled))


@dataclass(slots=True)
class _Scratch:
    distance: float = math.inf
    estimate: float = 0.0


def _best_first(
    nodes: Mapping[Point, Node],
    start: Point,
    goal: Point,
    on_visit: Optional[Observer],
    heuristic: Optional[Heuristic],
) -> SearchOutcome:
    def estimate(point: Point) -> float:
        return heuristic(point) if heuristic is not None else 0.0

    scratch: Dict[Point, _Scratch] = {start: _Scratch(distance=0.0, estimate=estimate(start))}
    parents: Dict[Point, Point] = {}
    settled_set: set[Point] = set()
    settled: List[Point] = []

    # The counter breaks priority ties so points are never compared.
    counter = itertools.count()
    heap: List[Tuple[float, int, Point]] = [(scratch[start].estimate, next(counter), start)]

    while heap:
        _, _, current = heapq.heappop(heap)

        if current in settled_set:
            continue

        settled_set.add(current)
        settled.append(current)
        if on_visit is not None:
            on_visit(current)

        current_distance = scratch[current].distance

        if current == goal:
            path = reconstruct_path(parents, start, goal)
            return SearchOutcome(path=path, cost=current_distance, settled=tuple(settled))

        for edge in nodes[current].edges:
            if edge.end in settled_set:
                continue

            new_distance = current_distance + edge.time
            neighbour = scratch.get(edge.end)
            if neighbour is None:
                neighbour = scratch[edge.end] = _Scratch(estimate=estimate(edge.end))

            if new_distance < neighbour.distance:
                neighbour.distance = new_distance
                parents[edge.end] = current
                heapq.heappush(
                    heap, (new_distance + neighbour.estimate, next(counter), edge.end)
                )

    return SearchOutcome(path=None, cost=math.inf, settled=tuple(settled))


def dijkstra(
    nodes: Mapping[Point, Node],
    start: Point,
    goal: Point,
    on_visit: Optional[Observer] = None,
) -> SearchOutcome:
    """Least travel-time path from ``start`` to ``goal``.

    The search stops as soon as the goal is settled, not when it is
    first discovered.
    """
    return _best_first(nodes, start, goal, on_visit, heuristic=None)


def a_star(
    nodes: Mapping[Point, Node],
    start: Point,
    goal: Point,
    heuristic: Heuristic,
    on_visit: Optional[Observer] = None,
) -> SearchOutcome:
    """Least travel-time path, guided by an admissible ``heuristic``.

    With an admissible, consistent heuristic the cost matches
    ``dijkstra`` while usually settling fewer nodes.
    """
    return _best_first(nodes, start, goal, on_visit, heuristic=heuristic)


def fastest_paths(
    nodes: Mapping[Point, Node],
    start: Point,
    targets: Iterable[Point],
    on_visit: Optional[Observer] = None,
) -> Dict[Point, Tuple[Path, float]]:
    """Fastest paths from ``start`` to each of ``targets`` in one Dijkstra run.

    The run stops once every target is settled or the frontier empties.
    Unreachable targets are missing from the result.

    Returns:
        Mapping of reached target to its (path, travel time).
    """
    wanted = set(targets)
    remaining = set(wanted)
    distances: Dict[Point, float] = {start: 0.0}
    parents: Dict[Point, Point] = {}
    settled: set[Point] = set()

    counter = itertools.count()
    heap: List[Tuple[float, int, Point]] = [(0.0, next(counter), start)]

    while heap and remaining:
        distance, _, current = heapq.heappop(heap)
        if current in settled:
            continue

        settled.add(current)
        remaining.discard(current)
        if on_visit is not None:
            on_visit(current)

        for edge in nodes[current].edges:
            if edge.end in settled:
                continue
            new_distance = distance + edge.time
            if new_distance < distances.get(edge.end, math.inf):
                distances[edge.end] = new_distance
                parents[edge.end] = current
                heapq.heappush(heap, (new_distance, next(counter), edge.end))

    return {
        target: (reconstruct_path(parents, start, target), distances[target])
        for target in wanted
        if target in settled
    }
