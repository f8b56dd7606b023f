"""Closed-tour planning over the road graph.

Tours start and end at the same point and visit every stop once. Legs
between tour points are fastest paths, so the tour cost is a travel
time. The order is built greedily (nearest neighbour) and then improved
with 2-opt segment reversals. Roads are directed, so every candidate
order is re-costed in full rather than by the usual symmetric delta.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence, Tuple

from ..domain.models import Path, Point
from .search import Observer

if TYPE_CHECKING:
    from .road_graph import RoadGraph

logger = logging.getLogger(__name__)

Leg = Tuple[Point, Point]


@dataclass(frozen=True, slots=True)
class Tour:
    """A planned closed tour.

    Attributes:
        path: Every point from start back to start
        order: Stops in visiting order
        cost: Total travel time in hours
    """

    path: Path
    order: Tuple[Point, ...]
    cost: float


def tour_cost(start: Point, order: Sequence[Point], costs: Dict[Leg, float]) -> float:
    stops = [start, *order, start]
    return sum(costs[(a, b)] for a, b in zip(stops, stops[1:]))


def nearest_neighbour_order(
    start: Point, stops: Sequence[Point], costs: Dict[Leg, float]
) -> List[Point]:
    """Visit the closest unvisited stop next, ties resolved by input order."""
    order: List[Point] = []
    remaining = list(stops)
    current = start
    while remaining:
        nearest = min(remaining, key=lambda stop: costs[(current, stop)])
        order.append(nearest)
        remaining.remove(nearest)
        current = nearest
    return order


def two_opt(
    start: Point,
    order: Sequence[Point],
    costs: Dict[Leg, float],
    max_passes: int = 50,
) -> List[Point]:
    """Reverse stop segments while doing so shortens the tour.

    Each pass tries every segment; the search stops after a pass with no
    improvement or after ``max_passes`` passes. The result is never
    longer than ``order``.
    """
    best = list(order)
    best_cost = tour_cost(start, best, costs)

    for _ in range(max_passes):
        improved = False
        for i in range(len(best) - 1):
            for j in range(i + 1, len(best)):
                candidate = best[:i] + best[i : j + 1][::-1] + best[j + 1 :]
                candidate_cost = tour_cost(start, candidate, costs)
                if candidate_cost < best_cost - 1e-12:
                    best, best_cost = candidate, candidate_cost
                    improved = True
        if not improved:
            break

    return best


def plan_tour(
    graph: RoadGraph,
    start: Point,
    stops: Sequence[Point],
    on_visit: Optional[Observer] = None,
    max_passes: int = 50,
) -> Optional[Tour]:
    """Plan a closed tour from ``start`` through ``stops``.

    Args:
        graph: Graph providing fastest paths from each tour point.
        start: Tour start and end; must not appear in ``stops``.
        stops: Distinct points to visit.
        on_visit: Observer forwarded to every single-source search.
        max_passes: Upper bound on 2-opt passes.

    Returns:
        The tour, or None if some leg has no path.
    """
    if not stops:
        return Tour(path=(start,), order=(), cost=0.0)

    points = [start, *stops]
    legs: Dict[Leg, Path] = {}
    costs: Dict[Leg, float] = {}
    for a in points:
        others = [b for b in points if b != a]
        reached = graph.fastest_paths(a, others, on_visit)
        for b in others:
            if b not in reached:
                logger.info(
                    "Tour leg unreachable",
                    extra={"from": str(a), "to": str(b)},
                )
                return None
            legs[(a, b)], costs[(a, b)] = reached[b]

    greedy = nearest_neighbour_order(start, stops, costs)
    order = two_opt(start, greedy, costs, max_passes=max_passes)

    full: List[Point] = [start]
    sequence = [start, *order, start]
    for a, b in zip(sequence, sequence[1:]):
        full.extend(legs[(a, b)][1:])

    cost = tour_cost(start, order, costs)
    logger.debug(
        "Tour planned",
        extra={
            "stops": len(order),
            "greedy_cost": tour_cost(start, greedy, costs),
            "cost": cost,
        },
    )
    return Tour(path=tuple(full), order=tuple(order), cost=cost)
