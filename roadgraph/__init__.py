"""Top-level package for roadgraph.

A directed road network graph with breadth-first, Dijkstra and A*
path search, a per-query path cache, road-type speeds used to turn
segment lengths into travel times, and closed-tour planning.

Loading map files and drawing routes are left to callers: they insert
vertices and edges, run queries, and render the returned points.
"""

from .domain import (
    Algorithm,
    InvalidEdgeError,
    NoRouteFoundError,
    Point,
    RoadGraphError,
    RouteResult,
    SpeedTable,
    TourError,
    UnknownVertexError,
)
from .graph import RoadGraph, RoadSegment, load_segments
from .services import RouteService

__all__ = [
    "Algorithm",
    "InvalidEdgeError",
    "NoRouteFoundError",
    "Point",
    "RoadGraph",
    "RoadGraphError",
    "RoadSegment",
    "RouteResult",
    "RouteService",
    "SpeedTable",
    "TourError",
    "UnknownVertexError",
    "load_segments",
]
