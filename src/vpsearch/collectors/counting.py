"""Instrument another collector."""

import typing

from .base import Collector


class Counted(typing.NamedTuple):
    """The result of a wrapped collector and the number of nodes the search visited."""

    result: typing.Any
    visited: int


class Counting(Collector[typing.Any, typing.Any, typing.Any, Counted]):
    """Counts the nodes a search visits while `inner` makes every decision.

    Each visited node costs exactly one distance computation, so `visited`
    measures how much work the pruning saved compared to a linear scan.
    """

    def __init__(self, inner: Collector) -> None:
        self.inner = inner
        self.visited = 0

    def consider(self, item: typing.Any, distance: typing.Any, index: int, user_data: typing.Any) -> None:  # noqa: ANN401
        self.visited += 1
        self.inner.consider(item, distance, index, user_data)

    def current_best_distance(self) -> typing.Any:  # noqa: ANN401
        return self.inner.current_best_distance()

    def result(self, user_data: typing.Any) -> Counted:  # noqa: ANN401
        return Counted(self.inner.finish(user_data), self.visited)


__all__ = ["Counted", "Counting"]
