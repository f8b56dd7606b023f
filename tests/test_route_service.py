"""Tests for the route service."""

from __future__ import annotations

import pytest

from roadgraph.domain.errors import NoRouteFoundError, TourError, UnknownVertexError
from roadgraph.domain.models import Algorithm, Point
from roadgraph.services import RouteService

from .points import A, B, C, D, E


class TestRouteService:
    """Test suite for RouteService."""

    @pytest.fixture
    def service(self, corridor):
        return RouteService(graph=corridor)

    def test_dijkstra_route_summary(self, service):
        result = service.find_route(A, D, Algorithm.DIJKSTRA)

        assert result.path == (A, B, C, D)
        assert result.algorithm is Algorithm.DIJKSTRA
        assert result.total_length_km == pytest.approx(3.9)
        assert result.total_time_h == pytest.approx(0.03)
        assert result.visited == 4
        assert result.cached is False
        assert result.duration_s >= 0.0
        assert result.num_points == 4
        assert not result.is_empty

    def test_bfs_route_by_name(self, service):
        result = service.find_route(A, D, "bfs")

        assert result.path == (A, D)
        assert result.algorithm is Algorithm.BFS
        assert result.total_length_km == pytest.approx(3.0)
        assert result.total_time_h == pytest.approx(0.15)

    def test_default_algorithm_is_a_star(self, service):
        result = service.find_route(A, D)

        assert result.algorithm is Algorithm.A_STAR
        assert result.path == (A, B, C, D)

    def test_repeated_route_is_cached(self, service):
        visits: list[Point] = []
        service.find_route(A, D, Algorithm.DIJKSTRA)

        result = service.find_route(A, D, Algorithm.DIJKSTRA, on_visit=visits.append)

        assert result.cached is True
        assert result.visited == 0
        assert visits == []

    def test_observer_is_forwarded(self, service):
        visits: list[Point] = []

        result = service.find_route(A, D, Algorithm.BFS, on_visit=visits.append)

        assert visits == [A, D]
        assert result.visited == 2

    def test_no_route_raises(self, service):
        with pytest.raises(NoRouteFoundError) as exc_info:
            service.find_route(A, E, Algorithm.A_STAR)

        error = exc_info.value
        assert error.start == A
        assert error.goal == E
        assert error.algorithm == "a_star"

    def test_unknown_algorithm_raises(self, service):
        with pytest.raises(ValueError):
            service.find_route(A, D, "greedy")

    def test_safe_returns_empty_result(self, service):
        result = service.find_route_safe(A, E, "dijkstra")

        assert result.is_empty
        assert result.algorithm is Algorithm.DIJKSTRA
        assert result.total_time_h == 0.0

    def test_safe_handles_unknown_points(self, service):
        assert service.find_route_safe(A, Point(50.0, 50.0)).is_empty

    def test_unknown_point_raises(self, service):
        with pytest.raises(UnknownVertexError):
            service.find_route(Point(50.0, 50.0), A)

    def test_round_trip_from_dead_end_raises(self, service):
        with pytest.raises(TourError):
            service.find_route(D, A, Algorithm.TSP)

    def test_safe_round_trip_from_dead_end_is_empty(self, service):
        result = service.find_route_safe(D, A, Algorithm.TSP)

        assert result.is_empty
        assert result.algorithm is Algorithm.TSP


class TestTourPlanning:
    """Tours through the service, on a two-way version of the corridor."""

    @pytest.fixture
    def service(self, corridor):
        corridor.add_edge(D, C, "M1", "motorway", 1.3)
        corridor.add_edge(C, B, "M1", "motorway", 1.3)
        corridor.add_edge(B, A, "M1", "motorway", 1.3)
        return RouteService(graph=corridor)

    def test_plan_tour(self, service):
        result = service.plan_tour(A, [D, B])

        assert result.algorithm is Algorithm.TSP
        assert result.path == (A, B, C, D, C, B, A)
        assert result.stops == (B, D)
        assert result.total_time_h == pytest.approx(0.06)
        assert result.total_length_km == pytest.approx(7.8)

    def test_tsp_algorithm_is_round_trip(self, service):
        result = service.find_route(A, C, Algorithm.TSP)

        assert result.path == (A, B, C, B, A)
        assert result.stops == (C,)

    def test_unreachable_stop_raises(self, service):
        with pytest.raises(NoRouteFoundError):
            service.plan_tour(A, [E])
