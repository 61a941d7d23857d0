"""Branch-and-bound search over a node arena."""

import collections.abc
import typing

from vpsearch.collectors import Collector
from vpsearch.metric import MetricFn
from vpsearch.models import NO_NODE
from vpsearch.models import Node


def _search_node(
    arena: collections.abc.Sequence[Node],
    node_index: int,
    query: typing.Any,  # noqa: ANN401
    user_data: typing.Any,  # noqa: ANN401
    metric: MetricFn,
    collector: Collector,
) -> None:
    node = arena[node_index]
    distance = metric(query, node.vantage_point, user_data)

    collector.consider(node.vantage_point, distance, node.index, user_data)

    # Visit the side the query falls on first so the bound tightens as early as
    # possible. The other side is only visited if it could hold an item within
    # the bound, by the triangle inequality. Only internal nodes have children and
    # their radius is a measured distance, so the leaf sentinel never takes part
    # in the arithmetic below.
    if distance < node.radius:
        if node.near != NO_NODE:
            _search_node(arena, node.near, query, user_data, metric, collector)
        if node.far != NO_NODE and node.radius - distance <= collector.current_best_distance():
            _search_node(arena, node.far, query, user_data, metric, collector)
    else:
        if node.far != NO_NODE:
            _search_node(arena, node.far, query, user_data, metric, collector)
        if node.near != NO_NODE and distance - node.radius <= collector.current_best_distance():
            _search_node(arena, node.near, query, user_data, metric, collector)


def search(
    arena: collections.abc.Sequence[Node],
    root: int,
    query: typing.Any,  # noqa: ANN401
    user_data: typing.Any,  # noqa: ANN401
    metric: MetricFn,
    collector: Collector,
) -> typing.Any:  # noqa: ANN401
    """Walk the arena from `root`, feeding `collector`, and return its result.

    Raises:
        RuntimeError: If `collector` has already produced a result.
    """
    if collector.finished:
        msg = f"{type(collector).__name__} has already produced its result and cannot be reused"
        raise RuntimeError(msg)
    if root != NO_NODE:
        _search_node(arena, root, query, user_data, metric, collector)
    return collector.finish(user_data)


__all__ = ["search"]
