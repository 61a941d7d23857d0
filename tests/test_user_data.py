"""Tests for the two ways a tree holds user data, and for item ownership."""

import pytest

from vpsearch.tree import Ownership
from vpsearch.tree import Tree

MAGIC = 12345


class Bar:
    def __init__(self, value: int) -> None:
        self.value = value

    def distance(self, other: "Bar", user_data: int) -> int:
        assert user_data == MAGIC
        return abs(self.value - other.value)


BARS = [Bar(10), Bar(15), Bar(20)]


def test_owned_user_data():
    tree = Tree.new(BARS, MAGIC)
    assert tree.ownership is Ownership.Owned
    assert tree.user_data == MAGIC
    assert tree.find_nearest(Bar(15)) == (1, 0)
    assert tree.find_nearest(Bar(16), MAGIC) == (1, 1)


def test_borrowed_user_data():
    tree = Tree.new_borrowed(BARS, MAGIC)
    assert tree.ownership is Ownership.Borrowed
    assert tree.user_data is None
    assert tree.find_nearest(Bar(9), MAGIC) == (0, 1)
    assert tree.find_k_nearest(Bar(14), 2, MAGIC) == {0, 1}
    assert tree.find_within(Bar(14), 100, user_data=MAGIC) == {0, 1, 2}


def test_borrowed_tree_requires_user_data():
    tree = Tree.new_borrowed(BARS, MAGIC)
    with pytest.raises(ValueError, match="borrows"):
        tree.find_nearest(Bar(9))


def test_user_data_reaches_metric_callable():
    seen: set[str] = set()

    def scaled(a: int, b: int, scale: int) -> int:
        seen.add("called")
        return abs(a - b) * scale

    tree = Tree.new([1, 5, 9], 3, metric=scaled)
    assert tree.find_nearest(4) == (1, 3)
    assert tree.find_nearest(4, 10) == (1, 10)
    assert seen == {"called"}


def test_referenced_items_are_shared():
    items = [[0.0], [10.0]]
    tree = Tree.new(items, metric=lambda a, b: abs(a[0] - b[0]))
    assert tree.nodes[tree.root].vantage_point is items[0]


def test_copied_items_are_independent():
    items = [[0.0], [10.0]]
    tree = Tree.new(items, metric=lambda a, b: abs(a[0] - b[0]), copy_items=True)
    items[0][0] = 100.0
    assert tree.nodes[tree.root].vantage_point == [0.0]
    assert tree.find_nearest([1.0]) == (0, 1.0)


def test_defaulted_metric_parameter_is_not_filled_with_user_data():
    def weighted(a: int, b: int, w: int = 1) -> int:
        return abs(a - b) * w

    tree = Tree.new([1, 5, 9], 1000, metric=weighted)
    assert tree.find_nearest(4) == (1, 1)
