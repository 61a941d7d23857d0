"""Tests for searching a tree against exhaustive scans."""

import functools
import math

import numpy
import pytest

from vpsearch.collectors import KNearest
from vpsearch.collectors import KNearestRanked
from vpsearch.collectors import WithinRadius
from vpsearch.metric import brute_force
from vpsearch.metric import euclidean
from vpsearch.metric import levenshtein
from vpsearch.tree import Tree


class Foo:
    def __init__(self, value: float) -> None:
        self.value = value

    def distance(self, other: "Foo", _: object) -> float:
        return abs(self.value - other.value)


class Point:
    def __init__(self, x: float, y: float) -> None:
        self.x = x
        self.y = y

    def distance(self, other: "Point", _: object) -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        return math.sqrt(dx * dx + dy * dy)


WORDS = [
    "apple", "apply", "ample", "maple", "angle", "ankle", "uncle", "castle",
    "cattle", "battle", "bottle", "little", "kettle", "settle", "title", "tile",
]


def test_find_nearest_scalars():
    tree = Tree.new([Foo(1.0), Foo(1.5), Foo(2.0)])
    assert tree.find_nearest(Foo(100.0)) == (2, 98.0)
    assert tree.find_nearest(Foo(-100.0)) == (0, 101.0)
    assert tree.find_nearest(Foo(1.5)) == (1, 0.0)
    assert tree.find_nearest(Foo(1.5 - 0.125)) == (1, 0.125)
    assert tree.find_nearest(Foo(2.0 - 0.125)) == (2, 0.125)


def test_equidistant_nearest_prefers_first_visited(points_2d: list[tuple[float, float]]):
    points = [Point(*p) for p in points_2d]
    tree = Tree.new(points)
    index, distance = tree.find_nearest(Point(1.0, 2.0))
    assert index in {0, 1}
    assert distance == pytest.approx(math.sqrt(2.0))
    # The root is visited first and only a strictly closer item replaces it.
    assert index == 0
    assert tree.find_nearest(Point(1.0, 2.0)) == (index, distance)


def test_k_nearest_points(points_2d: list[tuple[float, float]]):
    tree = Tree.new(points_2d, metric=euclidean)
    assert tree.find_nearest_custom((1.0, 2.0), KNearest(2)) == {0, 1}
    assert tree.find_nearest_custom((1.0, 2.0), KNearest(10)) == {0, 1, 2}
    assert tree.find_nearest_custom((1.0, 2.0), KNearest(0)) == set()


def test_radius_points(points_2d: list[tuple[float, float]]):
    tree = Tree.new(points_2d, metric=euclidean)
    assert tree.find_nearest_custom((1.0, 2.0), WithinRadius(0.0)) == set()
    assert tree.find_nearest_custom((1.0, 2.0), WithinRadius(100.0)) == {0, 1, 2}
    assert tree.find_within((1.0, 2.0), 2.0) == {0, 1}


@pytest.mark.parametrize("dim", [1, 2, 8])
@pytest.mark.parametrize("num_items", [1, 2, 5, 64, 300])
def test_nearest_matches_brute_force(rng: numpy.random.Generator, dim: int, num_items: int):
    items = list(rng.uniform(size=(num_items, dim)))
    tree = Tree.new(items, metric=euclidean)
    for query in rng.uniform(-0.5, 1.5, size=(20, dim)):
        dists = brute_force(items, query, euclidean)
        index, distance = tree.find_nearest(query)
        assert distance == min(dists)
        assert dists[index] == distance


@pytest.mark.parametrize("k", [0, 1, 3, 10, 50, 400])
def test_k_nearest_matches_brute_force(rng: numpy.random.Generator, k: int):
    items = list(rng.uniform(size=(300, 3)))
    tree = Tree.new(items, metric=euclidean)
    for query in rng.uniform(size=(10, 3)):
        dists = numpy.array(brute_force(items, query, euclidean))
        expected = set(numpy.argsort(dists)[:k].tolist())
        found = tree.find_k_nearest(query, k)
        assert found == expected
        assert len(found) == min(k, len(items))


def test_k_nearest_ranked_is_sorted(rng: numpy.random.Generator):
    items = list(rng.uniform(size=(200, 2)))
    tree = Tree.new(items, metric=euclidean)
    query = rng.uniform(size=2)
    ranked = tree.find_nearest_custom(query, KNearestRanked(15))
    dists = sorted(brute_force(items, query, euclidean))
    assert [d for _, d in ranked] == dists[:15]


@pytest.mark.parametrize("max_distance", [0.0, 0.05, 0.2, 0.5, 2.0])
def test_radius_matches_brute_force(rng: numpy.random.Generator, max_distance: float):
    items = list(rng.uniform(size=(250, 2)))
    tree = Tree.new(items, metric=euclidean)
    for query in rng.uniform(size=(10, 2)):
        dists = brute_force(items, query, euclidean)
        expected = {i for i, d in enumerate(dists) if d < max_distance}
        assert tree.find_within(query, max_distance) == expected


def test_radius_bound_is_exclusive():
    tree = Tree.new([0, 1, 2, 3], metric=lambda a, b: abs(a - b))
    assert tree.find_within(0, 2) == {0, 1}


def test_integer_distances_with_ties():
    tree = Tree.new(WORDS, metric=levenshtein)
    for query in ["apple", "bottle", "kitten", "angel", "a"]:
        dists = brute_force(WORDS, query, levenshtein)
        index, distance = tree.find_nearest(query)
        assert distance == min(dists)
        assert dists[index] == distance
        for k in (1, 4, 9):
            found = tree.find_k_nearest(query, k)
            assert sorted(dists[i] for i in found) == sorted(dists)[:k]


def test_duplicate_items():
    items = [(0.0, 0.0)] * 5 + [(1.0, 1.0)] * 5
    tree = Tree.new(items, metric=euclidean)
    assert tree.find_nearest((0.0, 0.0)) == (0, 0.0)
    assert tree.find_within((0.0, 0.0), 0.5) == {0, 1, 2, 3, 4}
    assert tree.find_k_nearest((1.0, 1.0), 5) == {5, 6, 7, 8, 9}


def test_single_item_tree():
    tree = Tree.new([(3.0, 4.0)], metric=euclidean)
    assert tree.find_nearest((0.0, 0.0)) == (0, 5.0)
    assert tree.find_k_nearest((0.0, 0.0), 1) == {0}
    assert tree.find_k_nearest((0.0, 0.0), 3) == {0}
    assert tree.find_k_nearest((0.0, 0.0), 0) == set()


def test_queries_are_repeatable(rng: numpy.random.Generator):
    items = list(rng.uniform(size=(100, 2)))
    tree = Tree.new(items, metric=euclidean)
    query = rng.uniform(size=2)
    assert tree.find_nearest(query) == tree.find_nearest(query)
    assert tree.find_k_nearest(query, 7) == tree.find_k_nearest(query, 7)
    assert tree.find_within(query, 0.3) == tree.find_within(query, 0.3)


def test_search_does_not_modify_tree(rng: numpy.random.Generator):
    items = list(rng.uniform(size=(50, 2)))
    tree = Tree.new(items, metric=euclidean)
    before = [(n.index, n.radius, n.near, n.far) for n in tree.nodes]
    tree.find_k_nearest(rng.uniform(size=2), 5)
    tree.find_within(rng.uniform(size=2), 0.5)
    assert [(n.index, n.radius, n.near, n.far) for n in tree.nodes] == before


@functools.total_ordering
class Gap:
    """An integer distance that refuses to compare with anything else."""

    def __init__(self, value: int) -> None:
        self.value = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Gap):
            return NotImplemented
        return self.value == other.value

    def __lt__(self, other: "Gap") -> bool:
        if not isinstance(other, Gap):
            return NotImplemented
        return self.value < other.value

    def __add__(self, other: "Gap") -> "Gap":
        return Gap(self.value + other.value)

    def __sub__(self, other: "Gap") -> "Gap":
        return Gap(self.value - other.value)

    def __hash__(self) -> int:
        return hash(self.value)


def gap(a: int, b: int) -> Gap:
    return Gap(abs(a - b))


def test_custom_distance_type_with_explicit_maximum():
    tree = Tree.new([1, 5, 9, 14, 20], metric=gap, max_distance=Gap(10**9))
    assert tree.max_distance == Gap(10**9)
    assert tree.nodes[-1].radius == Gap(10**9)
    assert tree.find_nearest(4) == (1, Gap(1))
    assert tree.find_nearest(100) == (4, Gap(80))
    assert tree.find_k_nearest(10, 2) == {2, 3}
    assert tree.find_within(10, Gap(5)) == {2, 3}
    ranked = tree.find_nearest_custom(12, KNearestRanked(3, max_distance=Gap(10**9)))
    assert ranked == [(3, Gap(2)), (2, Gap(3)), (1, Gap(7))]


def test_custom_distance_type_on_borrowed_tree():
    tree = Tree.new_borrowed([1, 5, 9], "ctx", metric=lambda a, b, _: gap(a, b), max_distance=Gap(10**9))
    assert tree.find_nearest(8, "ctx") == (2, Gap(1))


def test_nearest_when_nothing_is_below_the_maximum():
    tree = Tree.new(["a", "b"], metric=lambda a, b: 0.0 if a == b else math.inf)
    assert tree.find_nearest("z") == (0, math.inf)
    assert tree.find_nearest("b") == (1, 0.0)
