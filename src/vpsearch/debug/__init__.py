"""Inspecting a built tree: Graphviz output, node records and per-node properties.

None of this is used by queries.
"""

import collections.abc
import logging

import pandas
import pydantic

from vpsearch.models import NO_NODE
from vpsearch.models import Node
from vpsearch.models import NodeRecord
from vpsearch.tree import Tree

logger = logging.getLogger(__name__)

PROPERTY_COLUMNS = [
    "node",
    "index",
    "depth",
    "cardinality",
    "radius",
    "num_children",
]
"""Columns of the dataframe returned by `tree_properties`."""

_RECORDS_ADAPTER = pydantic.TypeAdapter(list[NodeRecord])


def _default_label(node: Node) -> str:
    return repr(node.vantage_point)


def _quote(label: str) -> str:
    escaped = label.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def to_dot(tree: Tree, label: collections.abc.Callable[[Node], str] = _default_label) -> str:
    """Render the tree as a Graphviz digraph.

    Args:
        tree: The tree to render.
        label: Names a node in the graph. Nodes with equal labels are merged by
            Graphviz, so pass something unique (e.g. the index) for collections
            with duplicate items.

    Returns:
        The `digraph` source, with one edge line per parent-child pair.
    """
    lines = ['digraph "vp tree.dot" {']
    for _, node, _ in tree.walk():
        parent = _quote(label(node))
        lines.extend(f"{parent} -> {_quote(label(tree.nodes[c]))}" for c in node.children())
    lines.append("}")
    return "\n".join(lines) + "\n"


def cardinalities(tree: Tree) -> list[int]:
    """Number of items in the subtree rooted at each arena position."""
    counts = [1] * len(tree)
    # Children always sit after their parent in the arena.
    for i in range(len(tree) - 1, -1, -1):
        counts[i] += sum(counts[c] for c in tree.nodes[i].children())
    return counts


def node_records(tree: Tree) -> list[NodeRecord]:
    """Summaries of every node, in pre-order."""
    counts = cardinalities(tree)
    return [
        NodeRecord(
            node=i,
            index=node.index,
            depth=depth,
            cardinality=counts[i],
            radius=None if node.is_leaf else float(node.radius),
            near=None if node.near == NO_NODE else node.near,
            far=None if node.far == NO_NODE else node.far,
        )
        for i, node, depth in tree.walk()
    ]


def to_json(tree: Tree) -> str:
    """Serialize the node records of a tree to JSON."""
    return _RECORDS_ADAPTER.dump_json(node_records(tree), indent=2).decode()


def records_from_json(contents: str | bytes) -> list[NodeRecord]:
    """Read node records written by `to_json`."""
    return _RECORDS_ADAPTER.validate_json(contents)


def tree_properties(tree: Tree) -> pandas.DataFrame:
    """Per-node properties of a tree, one row per node in pre-order.

    Leaves have a `radius` of NaN.
    """
    records = node_records(tree)
    frame = pandas.DataFrame(
        [
            {
                "node": r.node,
                "index": r.index,
                "depth": r.depth,
                "cardinality": r.cardinality,
                "radius": r.radius,
                "num_children": int(r.near is not None) + int(r.far is not None),
            }
            for r in records
        ],
        columns=PROPERTY_COLUMNS,
    )
    frame["radius"] = frame["radius"].astype(float)
    logger.debug(f"Collected properties of {len(frame)} nodes")
    return frame


__all__ = [
    "PROPERTY_COLUMNS",
    "cardinalities",
    "node_records",
    "records_from_json",
    "to_dot",
    "to_json",
    "tree_properties",
]
