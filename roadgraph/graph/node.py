"""Vertices and directed road segments.

Nodes carry no search state: distances, heuristics and parents live in
per-search side tables (see ``search.py``), so a node can be shared by
any number of searches.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Tuple

from ..domain.errors import InvalidEdgeError
from ..domain.models import Point
from ..domain.speeds import DEFAULT_SPEED_TABLE, SpeedTable


@dataclass(frozen=True, slots=True)
class Edge:
    """A directed road segment between two intersections.

    Attributes:
        start: Intersection the segment leaves from
        end: Intersection the segment leads to
        road_name: Street name
        road_type: Road classification (e.g. 'residential')
        length: Physical length in km, never negative
        time: Travel time in hours, derived from length and road type
    """

    start: Point
    end: Point
    road_name: str
    road_type: str
    length: float
    time: float

    @classmethod
    def create(
        cls,
        start: Point,
        end: Point,
        road_name: str,
        road_type: str,
        length: float,
        speed_table: SpeedTable = DEFAULT_SPEED_TABLE,
    ) -> Edge:
        """Build an edge, deriving its travel time from the speed table.

        Raises:
            InvalidEdgeError: If the length is negative or not finite.
        """
        if not math.isfinite(length) or length < 0:
            raise InvalidEdgeError(
                f"Edge length must be a finite non-negative number, got {length}",
                start=start,
                end=end,
            )
        return cls(
            start=start,
            end=end,
            road_name=road_name,
            road_type=road_type,
            length=float(length),
            time=speed_table.travel_time(length, road_type),
        )


@dataclass(eq=False, slots=True)
class Node:
    """A road intersection and its outgoing segments, in insertion order."""

    point: Point
    edges: List[Edge] = field(default_factory=list)

    def add_edge(self, edge: Edge) -> None:
        self.edges.append(edge)

    @property
    def out_degree(self) -> int:
        return len(self.edges)

    def neighbours(self) -> Tuple[Point, ...]:
        return tuple(edge.end for edge in self.edges)
