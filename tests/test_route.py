"""Tests for mars_cleanup.sim.route."""

from __future__ import annotations

import math

import pytest

from mars_cleanup.sim.models import Point
from mars_cleanup.sim.route import is_permutation, nearest_neighbor_order, route_length
from mars_cleanup.sim.world import generate_points


def _pts(*coords: tuple[float, float]) -> list[Point]:
    return [Point(x=x, y=y) for x, y in coords]


class TestNearestNeighborOrder:
    @pytest.mark.parametrize("n", [1, 2, 3, 17, 150])
    def test_permutation(self, n: int) -> None:
        order = nearest_neighbor_order(generate_points(n, n * 31))
        assert is_permutation(order, n)

    def test_starts_at_index_zero(self) -> None:
        # index 0 is far from everything else but still goes first
        points = _pts((500, 500), (10, 10), (11, 10), (12, 10))
        assert nearest_neighbor_order(points)[0] == 0

    def test_greedy_choice(self) -> None:
        points = _pts((0, 0), (10, 0), (1, 0), (5, 0))
        assert nearest_neighbor_order(points) == [0, 2, 3, 1]

    def test_tie_goes_to_lowest_index(self) -> None:
        points = _pts((0, 0), (0, 5), (5, 0), (-5, 0))
        assert nearest_neighbor_order(points)[1] == 1

    def test_seed_one_three_points(self) -> None:
        points = generate_points(3, 1)
        order = nearest_neighbor_order(points)
        assert order[0] == 0
        assert sorted(order) == [0, 1, 2]

    def test_empty(self) -> None:
        assert nearest_neighbor_order([]) == []

    def test_deterministic(self) -> None:
        points = generate_points(80, 9)
        assert nearest_neighbor_order(points) == nearest_neighbor_order(points)


class TestRouteLength:
    def test_sum_of_legs(self) -> None:
        points = _pts((0, 0), (3, 4), (3, 0))
        assert route_length(points, [0, 1, 2]) == pytest.approx(9.0)

    def test_with_start(self) -> None:
        points = _pts((3, 4))
        assert route_length(points, [0], start=(0.0, 0.0)) == pytest.approx(5.0)

    def test_single_point_without_start(self) -> None:
        assert route_length(_pts((1, 1)), [0]) == 0.0

    def test_matches_manual_sum(self) -> None:
        points = generate_points(30, 77)
        order = nearest_neighbor_order(points)
        manual = sum(
            math.dist((points[a].x, points[a].y), (points[b].x, points[b].y))
            for a, b in zip(order, order[1:])
        )
        assert route_length(points, order) == pytest.approx(manual)


class TestIsPermutation:
    def test_detects_duplicates_and_gaps(self) -> None:
        assert is_permutation([2, 0, 1], 3)
        assert not is_permutation([0, 0, 1], 3)
        assert not is_permutation([0, 1], 3)
