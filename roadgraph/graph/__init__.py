"""Road network graph and the path-finding algorithms that run on it."""

from .cache import NullPathCache, PathCache, make_key
from .loader import RoadSegment, load_segments
from .node import Edge, Node
from .road_graph import RoadGraph
from .search import SearchOutcome, a_star, breadth_first, dijkstra, fastest_paths
from .tsp import Tour, plan_tour

__all__ = [
    "Edge",
    "Node",
    "NullPathCache",
    "PathCache",
    "RoadGraph",
    "RoadSegment",
    "SearchOutcome",
    "Tour",
    "a_star",
    "breadth_first",
    "dijkstra",
    "fastest_paths",
    "load_segments",
    "make_key",
    "plan_tour",
]
