"""Building the node arena by recursive median partitioning."""

import collections.abc
import logging
import typing

from vpsearch.metric import MetricFn
from vpsearch.models import NO_NODE
from vpsearch.models import Node

logger = logging.getLogger(__name__)


class _Builder:
    """Holds the state shared by the recursion over one item collection."""

    def __init__(
        self,
        items: collections.abc.Sequence[typing.Any],
        metric: MetricFn,
        user_data: typing.Any,  # noqa: ANN401
        max_distance: typing.Any,  # noqa: ANN401
    ) -> None:
        self.items = items
        self.metric = metric
        self.user_data = user_data
        self.max_distance = max_distance
        self.arena: list[Node | None] = []

    def _reserve(self) -> int:
        """Claim the next arena slot so that parents precede their children."""
        self.arena.append(None)
        return len(self.arena) - 1

    def create_node(self, indices: list[int]) -> int:
        """Build the subtree over `indices` and return the arena index of its root.

        `indices` holds original item positions; the first one becomes the
        vantage point and the rest are split by their median distance from it.
        """
        if not indices:
            return NO_NODE

        slot = self._reserve()
        vp_index = indices[0]
        vantage_point = self.items[vp_index]

        if len(indices) == 1:
            self.arena[slot] = Node(vantage_point=vantage_point, index=vp_index, radius=self.max_distance)
            return slot

        # The sort is stable, so equidistant items keep their relative order.
        rest = [(self.metric(vantage_point, self.items[i], self.user_data), i) for i in indices[1:]]
        rest.sort(key=lambda pair: pair[0])

        half = len(rest) // 2
        radius = rest[half][0]

        near = self.create_node([i for _, i in rest[:half]])
        far = self.create_node([i for _, i in rest[half:]])

        self.arena[slot] = Node(vantage_point=vantage_point, index=vp_index, radius=radius, near=near, far=far)
        return slot


def build_arena(
    items: collections.abc.Sequence[typing.Any],
    metric: MetricFn,
    user_data: typing.Any,  # noqa: ANN401
    max_distance: typing.Any,  # noqa: ANN401
) -> tuple[tuple[Node, ...], int]:
    """Partition `items` into a flat arena of nodes.

    Args:
        items: The non-empty collection to index.
        metric: A three-argument metric callable.
        user_data: Passed to every distance computation.
        max_distance: The radius given to leaves.

    Returns:
        The arena and the arena index of the root node.

    Raises:
        ValueError: If `items` is empty.
    """
    if len(items) == 0:
        msg = "Cannot build a tree from an empty collection of items"
        logger.error(msg)
        raise ValueError(msg)

    builder = _Builder(items, metric, user_data, max_distance)
    root = builder.create_node(list(range(len(items))))
    arena = tuple(typing.cast(Node, n) for n in builder.arena)

    logger.debug(f"Built arena of {len(arena)} nodes for {len(items)} items")
    return arena, root


__all__ = ["build_arena"]
