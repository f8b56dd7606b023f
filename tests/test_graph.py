import math

import pytest

from roadgraph.domain.errors import InvalidEdgeError, UnknownVertexError
from roadgraph.domain.models import Point
from roadgraph.graph import RoadGraph

from .points import A, B, C, D, E, F


def test_add_vertex_reports_new_insertion():
    graph = RoadGraph()

    assert graph.add_vertex(A) is True
    assert graph.add_vertex(A) is False
    assert graph.vertex_count() == 1


def test_add_vertex_twice_keeps_existing_edges():
    graph = RoadGraph()
    graph.add_vertex(A)
    graph.add_vertex(B)
    graph.add_edge(A, B, "Elm", "residential", 1.0)

    graph.add_vertex(Point(0.0, 0.0))

    assert graph.vertex_count() == 2
    assert graph.edge_count() == 1


def test_counts_and_vertices(corridor):
    assert corridor.vertex_count() == 6
    assert len(corridor) == 6
    assert corridor.edge_count() == 5
    assert corridor.vertices() == frozenset({A, B, C, D, E, F})
    assert A in corridor
    assert Point(5.0, 5.0) not in corridor


def test_edges_keep_insertion_order(corridor):
    edges = corridor.edges_from(A)

    assert [edge.end for edge in edges] == [D, B]
    assert corridor.neighbours(A) == (D, B)
    assert corridor.edges_from(D) == ()


def test_edge_time_derived_from_road_type(corridor):
    motorway = corridor.edges_from(A)[1]

    assert motorway.road_name == "M1"
    assert motorway.length == 1.3
    assert motorway.time == pytest.approx(0.01)


@pytest.mark.parametrize(
    ("start", "end"),
    [
        (A, Point(9.0, 9.0)),
        (Point(9.0, 9.0), A),
        (Point(8.0, 8.0), Point(9.0, 9.0)),
    ],
)
def test_add_edge_with_unknown_endpoint_fails_without_change(corridor, start, end):
    with pytest.raises(UnknownVertexError) as exc_info:
        corridor.add_edge(start, end, "Ghost Road", "residential", 1.0)

    assert isinstance(exc_info.value, ValueError)
    assert exc_info.value.point in (start, end)
    assert corridor.vertex_count() == 6
    assert corridor.edge_count() == 5


@pytest.mark.parametrize("length", [-0.1, math.inf, math.nan])
def test_add_edge_rejects_invalid_length(corridor, length):
    with pytest.raises(InvalidEdgeError):
        corridor.add_edge(A, C, "Broken", "residential", length)

    assert corridor.edge_count() == 5
    assert [edge.end for edge in corridor.edges_from(A)] == [D, B]


def test_zero_length_edge_is_allowed(corridor):
    edge = corridor.add_edge(B, A, "Ramp", "motorway_link", 0.0)

    assert edge.time == 0.0
    assert corridor.edge_count() == 6


def test_path_length_and_time(corridor):
    path = (A, B, C, D)

    assert corridor.path_length(path) == pytest.approx(3.9)
    assert corridor.path_time(path) == pytest.approx(0.03)
    assert corridor.path_length((A,)) == 0.0


def test_path_time_uses_fastest_parallel_edge(corridor):
    corridor.add_edge(A, B, "Side Street", "residential", 1.0)

    assert corridor.path_time((A, B)) == pytest.approx(0.01)


def test_path_with_missing_hop_raises(corridor):
    with pytest.raises(InvalidEdgeError) as exc_info:
        corridor.path_time((A, C))

    assert exc_info.value.start == A
    assert exc_info.value.end == C


def test_edges_from_unknown_point_raises():
    with pytest.raises(UnknownVertexError):
        RoadGraph().edges_from(A)
