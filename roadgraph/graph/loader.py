"""Graph population from already-parsed road segments.

Parsing map files is left to callers; this module only turns segment
records into vertex and edge insertions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from ..domain.models import Point
from .road_graph import RoadGraph

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RoadSegment:
    """One road segment as read from a map source.

    Attributes:
        start: Intersection the segment leaves from
        end: Intersection the segment leads to
        road_name: Street name
        road_type: Road classification
        length: Segment length in km
    """

    start: Point
    end: Point
    road_name: str
    road_type: str
    length: float


def load_segments(
    graph: RoadGraph,
    segments: Iterable[RoadSegment],
    bidirectional: bool = False,
) -> int:
    """Insert ``segments`` into ``graph``, registering endpoints as needed.

    Args:
        graph: Graph to populate.
        segments: Segment records.
        bidirectional: Also insert the reverse edge of every segment.

    Returns:
        Number of edges inserted.

    Raises:
        InvalidEdgeError: If a segment has an invalid length.
    """
    vertices_before = graph.vertex_count()
    inserted = 0

    for segment in segments:
        graph.add_vertex(segment.start)
        graph.add_vertex(segment.end)
        graph.add_edge(
            segment.start, segment.end, segment.road_name, segment.road_type, segment.length
        )
        inserted += 1
        if bidirectional:
            graph.add_edge(
                segment.end, segment.start, segment.road_name, segment.road_type, segment.length
            )
            inserted += 1

    logger.info(
        "Road segments loaded",
        extra={
            "edges": inserted,
            "new_vertices": graph.vertex_count() - vertices_before,
        },
    )
    return inserted
