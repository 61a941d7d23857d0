"""Keep every item within a fixed distance."""

import typing

from .base import Collector


class WithinRadius(Collector[typing.Any, typing.Any, typing.Any, set[int]]):
    """Collects the indices of all items strictly closer than `max_distance`.

    The bound never tightens, so the search visits every subtree that may hold
    a qualifying item.
    """

    def __init__(self, max_distance: typing.Any) -> None:  # noqa: ANN401
        self.max_distance = max_distance
        self.indices: set[int] = set()

    def consider(self, item: typing.Any, distance: typing.Any, index: int, user_data: typing.Any) -> None:  # noqa: ANN401, ARG002
        if distance < self.max_distance:
            self.indices.add(index)

    def current_best_distance(self) -> typing.Any:  # noqa: ANN401
        return self.max_distance

    def result(self, user_data: typing.Any) -> set[int]:  # noqa: ANN401, ARG002
        return self.indices


__all__ = ["WithinRadius"]
