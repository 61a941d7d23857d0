"""The vantage-point tree."""

import collections.abc
import copy
import enum
import logging
import typing

from vpsearch.collectors import Collector
from vpsearch.collectors import KNearest
from vpsearch.collectors import Nearest
from vpsearch.collectors import WithinRadius
from vpsearch.metric import MetricFn
from vpsearch.metric import max_distance_for
from vpsearch.metric import resolve_metric
from vpsearch.models import Node

from . import builder
from . import search

logger = logging.getLogger(__name__)


class Ownership(enum.StrEnum):
    """Where the user data a tree was built with lives."""

    Owned = "owned"
    """The tree keeps the user data and uses it for queries that do not pass their own."""
    Borrowed = "borrowed"
    """The caller keeps the user data and passes it to every query."""


class _Unset(enum.Enum):
    Unset = enum.auto()


_UNSET = _Unset.Unset


class Tree:
    """An immutable index over a fixed collection of items from a metric space.

    Build one with `Tree.new` or `Tree.new_borrowed`, then query it any number
    of times. Queries return positions in the collection the tree was built
    from. Nothing about a tree changes after construction, so concurrent
    read-only queries are safe.
    """

    __slots__ = ("_max_distance", "_metric", "_nodes", "_ownership", "_root", "_user_data")

    def __init__(
        self,
        nodes: tuple[Node, ...],
        root: int,
        *,
        metric: MetricFn,
        user_data: typing.Any,  # noqa: ANN401
        ownership: Ownership,
        max_distance: typing.Any,  # noqa: ANN401
    ) -> None:
        self._nodes = nodes
        self._root = root
        self._metric = metric
        self._user_data = user_data
        self._ownership = ownership
        self._max_distance = max_distance

    @classmethod
    def _build(
        cls,
        items: collections.abc.Sequence[typing.Any],
        user_data: typing.Any,  # noqa: ANN401
        ownership: Ownership,
        metric: collections.abc.Callable[..., typing.Any] | None,
        *,
        copy_items: bool,
        max_distance: typing.Any,  # noqa: ANN401
    ) -> "Tree":
        if copy_items:
            items = [copy.deepcopy(item) for item in items]
        fn = resolve_metric(metric)
        if max_distance is None:
            max_distance = max_distance_for(items)
        nodes, root = builder.build_arena(items, fn, user_data, max_distance)
        kept = user_data if ownership == Ownership.Owned else None
        tree = cls(nodes, root, metric=fn, user_data=kept, ownership=ownership, max_distance=max_distance)
        logger.debug(f"Built {tree!r}")
        return tree

    @classmethod
    def new(
        cls,
        items: collections.abc.Sequence[typing.Any],
        user_data: typing.Any = None,  # noqa: ANN401
        *,
        metric: collections.abc.Callable[..., typing.Any] | None = None,
        copy_items: bool = False,
        max_distance: typing.Any = None,  # noqa: ANN401
    ) -> "Tree":
        """Build a tree that keeps its own user data.

        Args:
            items: The non-empty collection to index.
            user_data: Passed to the metric during construction and to every
                query that does not supply its own.
            metric: A callable `metric(a, b, user_data)` or `metric(a, b)`.
                User data is passed as the third argument only when that
                parameter has no default. If `None`, items must implement
                `MetricSpace`.
            copy_items: Store deep copies of the items instead of references
                to the caller's items.
            max_distance: A distance no real distance reaches, used as the
                leaf radius and the starting bound of the built-in collectors.
                Defaults to the item type's `MAX_DISTANCE`, else `math.inf`.
                Pass one when the metric returns a type that cannot be
                compared with a float.

        Raises:
            ValueError: If `items` is empty.
        """
        return cls._build(
            items, user_data, Ownership.Owned, metric, copy_items=copy_items, max_distance=max_distance,
        )

    @classmethod
    def new_borrowed(
        cls,
        items: collections.abc.Sequence[typing.Any],
        user_data: typing.Any,  # noqa: ANN401
        *,
        metric: collections.abc.Callable[..., typing.Any] | None = None,
        copy_items: bool = False,
        max_distance: typing.Any = None,  # noqa: ANN401
    ) -> "Tree":
        """Build a tree whose user data stays with the caller.

        The user data is used during construction but not retained; every query
        must pass it again. The other arguments are as for `Tree.new`.

        Raises:
            ValueError: If `items` is empty.
        """
        return cls._build(
            items, user_data, Ownership.Borrowed, metric, copy_items=copy_items, max_distance=max_distance,
        )

    @property
    def nodes(self) -> tuple[Node, ...]:
        """The node arena."""
        return self._nodes

    @property
    def root(self) -> int:
        """Arena index of the root node."""
        return self._root

    @property
    def ownership(self) -> Ownership:
        """Whether the tree owns its user data."""
        return self._ownership

    @property
    def user_data(self) -> typing.Any:  # noqa: ANN401
        """The owned user data, or `None` for a borrowing tree."""
        return self._user_data

    @property
    def max_distance(self) -> typing.Any:  # noqa: ANN401
        """The maximum-distance sentinel carried by leaves."""
        return self._max_distance

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"Tree(items={len(self)}, depth={self.depth()}, ownership={self._ownership.value})"

    def depth(self) -> int:
        """Number of nodes on the longest root-to-leaf path."""
        deepest = 0
        stack = [(self._root, 1)]
        while stack:
            i, d = stack.pop()
            deepest = max(deepest, d)
            stack.extend((c, d + 1) for c in self._nodes[i].children())
        return deepest

    def _resolve_user_data(self, user_data: typing.Any) -> typing.Any:  # noqa: ANN401
        if user_data is not _UNSET:
            return user_data
        if self._ownership == Ownership.Borrowed:
            msg = "This tree borrows its user data; pass `user_data` to every query"
            raise ValueError(msg)
        return self._user_data

    def find_nearest_custom(
        self,
        query: typing.Any,  # noqa: ANN401
        collector: Collector,
        user_data: typing.Any = _UNSET,  # noqa: ANN401
    ) -> typing.Any:  # noqa: ANN401
        """Search with any collector and return its result.

        Args:
            query: The item to search around. It need not be in the tree.
            collector: A fresh collector deciding what to keep.
            user_data: Overrides the owned user data; required for a
                borrowing tree.

        Raises:
            ValueError: If a borrowing tree is queried without user data.
            RuntimeError: If `collector` was already used.
        """
        data = self._resolve_user_data(user_data)
        return search.search(self._nodes, self._root, query, data, self._metric, collector)

    def find_nearest(
        self,
        query: typing.Any,  # noqa: ANN401
        user_data: typing.Any = _UNSET,  # noqa: ANN401
    ) -> tuple[int, typing.Any]:
        """Index and distance of the item closest to `query`.

        Among equidistant items the first one the search visits wins; the root
        (the first item of the collection) is always visited first. An index is
        returned even if every distance equals the maximum sentinel.
        """
        collector = Nearest(max_distance=self._max_distance)
        index, distance = self.find_nearest_custom(query, collector, user_data)
        return typing.cast(int, index), distance

    def find_k_nearest(
        self,
        query: typing.Any,  # noqa: ANN401
        k: int,
        user_data: typing.Any = _UNSET,  # noqa: ANN401
    ) -> set[int]:
        """Indices of the `k` items closest to `query`."""
        return self.find_nearest_custom(query, KNearest(k, max_distance=self._max_distance), user_data)

    def find_within(
        self,
        query: typing.Any,  # noqa: ANN401
        max_distance: typing.Any,  # noqa: ANN401
        user_data: typing.Any = _UNSET,  # noqa: ANN401
    ) -> set[int]:
        """Indices of the items strictly closer to `query` than `max_distance`."""
        return self.find_nearest_custom(query, WithinRadius(max_distance), user_data)

    def walk(self) -> collections.abc.Iterator[tuple[int, Node, int]]:
        """Yield `(arena_index, node, depth)` in pre-order, root at depth 0."""
        stack = [(self._root, 0)]
        while stack:
            i, d = stack.pop()
            node = self._nodes[i]
            yield i, node, d
            stack.extend((c, d + 1) for c in reversed(node.children()))


__all__ = ["Ownership", "Tree"]
