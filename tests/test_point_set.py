"""
Unit tests for Point and NaivePointSet.
"""

import math

import pytest
from PointSet import InvalidArgumentError, NaivePointSet, Point, PointSet, SpatialIndexError


class TestPoint:
    def test_equality_is_exact(self):
        assert Point(1.0, 2.0) == Point(1, 2)
        assert Point(1.0, 2.0) != Point(1.0, 2.0000001)

    def test_hashable(self):
        lookup = {Point(1.5, 2.5): "a"}
        assert lookup[Point(1.5, 2.5)] == "a"

    def test_immutable(self):
        p = Point(1, 2)
        with pytest.raises(AttributeError):
            p.x = 3

    def test_of_converts_pairs(self):
        p = Point.of([3, "4.5"])
        assert p == Point(3.0, 4.5)
        assert isinstance(p.x, float)

    def test_of_returns_same_point(self):
        p = Point(1, 1)
        assert Point.of(p) is p

    def test_distances(self):
        a, b = Point(0, 0), Point(3, 4)
        assert Point.squared_distance(a, b) == 25
        assert Point.distance(a, b) == pytest.approx(5.0)
        assert Point.distance(b, b) == 0

    def test_distance_is_symmetric(self):
        a, b = Point(-1.5, 2.25), Point(7.0, -3.0)
        assert Point.distance(a, b) == Point.distance(b, a)
        assert Point.distance(a, b) == pytest.approx(math.hypot(8.5, 5.25))


class TestNaivePointSet:
    def test_rejects_empty(self):
        with pytest.raises(InvalidArgumentError):
            NaivePointSet([])

    def test_errors_share_base(self):
        assert issubclass(InvalidArgumentError, SpatialIndexError)
        assert issubclass(InvalidArgumentError, ValueError)

    def test_drops_duplicates_keeping_order(self):
        ps = NaivePointSet([(1, 1), (2, 2), (1, 1)])
        assert ps.points == [Point(1, 1), Point(2, 2)]
        assert len(ps) == 2

    def test_scenario(self, scenario_points):
        ps = NaivePointSet(scenario_points)
        assert ps.nearest(0, 0) == Point(1, 1)
        assert ps.nearest(6, 2) == Point(8, 2)

    def test_tie_keeps_first_in_input_order(self, scenario_points):
        ps = NaivePointSet(scenario_points)
        assert ps.nearest(4, 4) == Point(5, 5)
        assert NaivePointSet([Point(3, 3), Point(5, 5)]).nearest(4, 4) == Point(3, 3)

    def test_is_a_point_set(self):
        assert isinstance(NaivePointSet([(0, 0)]), PointSet)

    def test_point_set_is_abstract(self):
        with pytest.raises(TypeError):
            PointSet()
