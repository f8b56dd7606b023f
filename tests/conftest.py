from __future__ import annotations

import pytest

from roadgraph.config import SearchConfig, reset_config
from roadgraph.graph import RoadGraph

from .points import A, B, C, D, E, F


@pytest.fixture(autouse=True)
def fresh_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def corridor() -> RoadGraph:
    """A slow direct road A->D next to a fast motorway A->B->C->D.

    BFS prefers the single residential edge (time 0.15), Dijkstra and A*
    the three motorway edges (time 0.03). E->F is a separate component.
    """
    graph = RoadGraph(config=SearchConfig())
    for point in (A, B, C, D, E, F):
        graph.add_vertex(point)

    graph.add_edge(A, D, "Main Street", "residential", 3.0)
    graph.add_edge(A, B, "M1", "motorway", 1.3)
    graph.add_edge(B, C, "M1", "motorway", 1.3)
    graph.add_edge(C, D, "M1", "motorway", 1.3)
    graph.add_edge(E, F, "Island Road", "residential", 1.0)
    return graph
