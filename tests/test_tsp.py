"""Tests for closed-tour planning."""

from __future__ import annotations

import pytest

from roadgraph.config import SearchConfig
from roadgraph.domain.errors import TourError, UnknownVertexError
from roadgraph.domain.models import Point
from roadgraph.graph import RoadGraph
from roadgraph.graph.tsp import nearest_neighbour_order, plan_tour, tour_cost, two_opt

P0 = Point(0.0, 0.0)
P1 = Point(1.0, 0.0)
P2 = Point(1.0, 1.0)
P3 = Point(0.0, 1.0)


@pytest.fixture
def square() -> RoadGraph:
    """Unit square of two-way residential streets with two diagonals."""
    graph = RoadGraph(config=SearchConfig())
    for point in (P0, P1, P2, P3):
        graph.add_vertex(point)
    for a, b in [(P0, P1), (P1, P2), (P2, P3), (P3, P0)]:
        graph.add_edge(a, b, "Side", "residential", 1.0)
        graph.add_edge(b, a, "Side", "residential", 1.0)
    for a, b in [(P0, P2), (P1, P3)]:
        graph.add_edge(a, b, "Diagonal", "residential", 1.5)
        graph.add_edge(b, a, "Diagonal", "residential", 1.5)
    return graph


def test_tour_visits_every_stop_and_returns(square):
    tour = square.tsp(P0, [P2, P1, P3])

    assert tour == (P0, P1, P2, P3, P0)
    assert square.path_time(tour) == pytest.approx(0.2)


def test_plan_tour_reports_order_and_cost(square):
    tour = plan_tour(square, P0, (P2, P1, P3))

    assert tour is not None
    assert tour.order == (P1, P2, P3)
    assert tour.cost == pytest.approx(0.2)


def test_one_search_per_tour_point(square, monkeypatch):
    sources: list[Point] = []
    search = square.fastest_paths

    def record(start, targets, on_visit=None):
        sources.append(start)
        return search(start, targets, on_visit)

    monkeypatch.setattr(square, "fastest_paths", record)

    assert square.tsp(P0, [P1, P2, P3]) == (P0, P1, P2, P3, P0)
    assert sources == [P0, P1, P2, P3]


def test_tour_is_cached(square):
    visits: list[Point] = []
    first = square.tsp(P0, [P1, P2, P3], visits.append)
    assert visits

    visits.clear()
    second = square.tsp(P0, [P1, P2, P3], visits.append)

    assert first == second
    assert visits == []


@pytest.mark.parametrize("stops", [[], [P0]])
def test_tour_without_stops_is_the_start(square, stops):
    assert square.tsp(P0, stops) == (P0,)


def test_duplicate_stops_are_visited_once(square):
    assert square.tsp(P0, [P1, P1]) == (P0, P1, P0)


def test_start_without_outgoing_road_raises(square):
    dead_end = Point(5.0, 5.0)
    square.add_vertex(dead_end)

    with pytest.raises(TourError) as exc_info:
        square.tsp(dead_end, [P0])

    assert exc_info.value.start == dead_end


def test_unknown_stop_raises(square):
    with pytest.raises(UnknownVertexError):
        square.tsp(P0, [Point(9.0, 9.0)])


def test_unreachable_stop_returns_none(square):
    island = Point(7.0, 7.0)
    square.add_vertex(island)

    assert square.tsp(P0, [P1, island]) is None
    assert all(key.algorithm.value != "tsp" for key in square.cache.keys())


def test_one_way_streets_are_respected():
    graph = RoadGraph(config=SearchConfig())
    for point in (P0, P1, P2):
        graph.add_vertex(point)
    # One-way loop P0 -> P1 -> P2 -> P0.
    graph.add_edge(P0, P1, "One Way", "residential", 1.0)
    graph.add_edge(P1, P2, "One Way", "residential", 1.0)
    graph.add_edge(P2, P0, "One Way", "residential", 1.5)

    assert graph.tsp(P0, [P2, P1]) == (P0, P1, P2, P0)


S = Point(0.0, 0.0)
X1 = Point(1.0, 0.0)
X2 = Point(2.0, 0.0)
X3 = Point(3.0, 0.0)


@pytest.fixture
def line_costs() -> dict:
    points = [S, X1, X2, X3]
    return {(a, b): abs(a.x - b.x) for a in points for b in points if a != b}


def test_nearest_neighbour_order(line_costs):
    assert nearest_neighbour_order(S, [X3, X2, X1], line_costs) == [X1, X2, X3]


def test_two_opt_untangles_crossing(line_costs):
    tangled = [X2, X1, X3]
    assert tour_cost(S, tangled, line_costs) == 8.0

    improved = two_opt(S, tangled, line_costs)

    assert improved == [X1, X2, X3]
    assert tour_cost(S, improved, line_costs) == 6.0


def test_two_opt_never_worsens(line_costs):
    for order in ([X1, X2, X3], [X3, X1, X2], [X2, X3, X1]):
        improved = two_opt(S, order, line_costs)
        assert tour_cost(S, improved, line_costs) <= tour_cost(S, order, line_costs)
        assert sorted(improved, key=lambda p: p.x) == [X1, X2, X3]


def test_two_opt_respects_pass_limit(line_costs):
    assert two_opt(S, [X2, X1, X3], line_costs, max_passes=0) == [X2, X1, X3]
