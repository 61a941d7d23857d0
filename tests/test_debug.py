"""Tests for the tree inspection helpers."""

import math

import numpy

from vpsearch import debug
from vpsearch.metric import euclidean
from vpsearch.tree import Tree


def absolute(a: int, b: int) -> int:
    return abs(a - b)


def test_to_dot():
    tree = Tree.new([10, 15, 20], metric=absolute)
    assert debug.to_dot(tree) == 'digraph "vp tree.dot" {\n"10" -> "15"\n"10" -> "20"\n}\n'


def test_to_dot_edges():
    tree = Tree.new([0, 1, 2, 3], metric=absolute)
    dot = debug.to_dot(tree, label=lambda node: f"n{node.index}")
    assert dot.startswith('digraph "vp tree.dot" {\n')
    assert dot.endswith("}\n")
    # 0 splits into near {1} and far {2, 3}, and 2 has 3 as its far child.
    assert '"n0" -> "n1"' in dot
    assert '"n0" -> "n2"' in dot
    assert '"n2" -> "n3"' in dot
    assert dot.count("->") == 3


def test_to_dot_escapes_quotes():
    tree = Tree.new(['a"b', "c"], metric=lambda a, b: float(a != b))
    assert '"\'a\\"b\'" -> "\'c\'"' in debug.to_dot(tree)


def test_node_records(rng: numpy.random.Generator):
    items = list(rng.uniform(size=(31, 2)))
    tree = Tree.new(items, metric=euclidean)
    records = debug.node_records(tree)
    assert len(records) == 31
    assert records[0].node == tree.root
    assert records[0].depth == 0
    assert records[0].cardinality == 31
    leaves = [r for r in records if r.near is None and r.far is None]
    assert all(r.radius is None and r.cardinality == 1 for r in leaves)
    assert debug.records_from_json(debug.to_json(tree)) == records


def test_cardinalities():
    tree = Tree.new(list(range(7)), metric=absolute)
    counts = debug.cardinalities(tree)
    root = tree.nodes[tree.root]
    assert counts[tree.root] == 7
    assert counts[root.near] + counts[root.far] == 6


def test_tree_properties(rng: numpy.random.Generator):
    items = list(rng.uniform(size=(64, 3)))
    tree = Tree.new(items, metric=euclidean)
    frame = debug.tree_properties(tree)
    assert list(frame.columns) == debug.PROPERTY_COLUMNS
    assert len(frame) == 64
    assert sorted(frame["index"].tolist()) == list(range(64))
    assert frame["depth"].max() + 1 == tree.depth()
    leaves = frame[frame["num_children"] == 0]
    assert leaves["radius"].isna().all()
    assert not frame[frame["num_children"] > 0]["radius"].isna().any()
    assert math.isclose(frame.iloc[0]["radius"], tree.nodes[tree.root].radius)
