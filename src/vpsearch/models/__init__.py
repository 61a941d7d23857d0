"""Pydantic models for the nodes of a tree."""

import typing

import pydantic

I = typing.TypeVar("I")  # noqa: E741
D = typing.TypeVar("D")

NO_NODE = -1
"""Index used in place of a missing child. Never a valid arena position."""


class Node(pydantic.BaseModel, typing.Generic[I, D]):
    """One vantage point in the arena.

    Attributes:
        vantage_point: The item this node represents.
        index: Position of the item in the collection the tree was built from.
        radius: Items under `near` are no farther than this from the vantage
            point, items under `far` are no nearer. Leaves carry the tree's
            maximum-distance sentinel.
        near: Arena index of the near child, or `NO_NODE`.
        far: Arena index of the far child, or `NO_NODE`.
    """

    model_config = pydantic.ConfigDict(frozen=True, arbitrary_types_allowed=True)

    vantage_point: I
    index: int
    radius: D
    near: int = NO_NODE
    far: int = NO_NODE

    @property
    def is_leaf(self) -> bool:
        """Whether the node has no children."""
        return self.near == NO_NODE and self.far == NO_NODE

    def children(self) -> list[int]:
        """Arena indices of the existing children, near first."""
        return [c for c in (self.near, self.far) if c != NO_NODE]


class NodeRecord(pydantic.BaseModel):
    """A serializable summary of a node, without the item itself."""

    node: int
    index: int
    depth: int
    cardinality: int
    radius: float | None
    near: int | None
    far: int | None


__all__ = ["D", "I", "NO_NODE", "Node", "NodeRecord"]
