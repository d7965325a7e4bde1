"""
Shared pytest fixtures for the KD-tree test suite.
"""

import random

import pytest
from PointSet import Point


@pytest.fixture
def scenario_points():
    """The four-point set S = {(1,1), (5,5), (3,3), (8,2)}."""
    return [Point(1, 1), Point(5, 5), Point(3, 3), Point(8, 2)]


@pytest.fixture
def rng():
    """A seeded random generator so property trials are reproducible."""
    return random.Random(20261018)


@pytest.fixture
def random_points(rng):
    """Factory for uniformly distributed points in a square."""
    def make(n, low=-100.0, high=100.0):
        return [Point(rng.uniform(low, high), rng.uniform(low, high)) for _ in range(n)]
    return make
