"""Keep the single closest item."""

import typing

from vpsearch.metric import MAX_DISTANCE

from .base import Collector


class Nearest(Collector[typing.Any, typing.Any, typing.Any, tuple[int | None, typing.Any]]):
    """Tracks the closest candidate seen so far.

    The first candidate is always kept, whatever its distance. After that a
    candidate replaces the retained one only when it is strictly closer, so
    among equidistant items the first one visited wins. The index stays `None`
    only if nothing was ever considered.
    """

    def __init__(self, *, max_distance: typing.Any = MAX_DISTANCE) -> None:  # noqa: ANN401
        self.index: int | None = None
        self.distance = max_distance

    def consider(self, item: typing.Any, distance: typing.Any, index: int, user_data: typing.Any) -> None:  # noqa: ANN401, ARG002
        if self.index is None or distance < self.distance:
            self.distance = distance
            self.index = index

    def current_best_distance(self) -> typing.Any:  # noqa: ANN401
        return self.distance

    def result(self, user_data: typing.Any) -> tuple[int | None, typing.Any]:  # noqa: ANN401, ARG002
        return self.index, self.distance


__all__ = ["Nearest"]
