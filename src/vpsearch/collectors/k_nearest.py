"""Keep the `k` closest items."""

import bisect
import typing

from vpsearch.metric import MAX_DISTANCE

from .base import Collector


class KNearest(Collector[typing.Any, typing.Any, typing.Any, set[int]]):
    """Tracks the `k` closest candidates and returns their indices.

    Retained candidates are kept as an ascending list of
    `(distance, index, item)` entries. Once the list is full a candidate is
    admitted only if it is strictly closer than the worst entry, which is then
    dropped. Equidistant entries keep the order in which they were visited.

    With `k = 0` nothing is ever retained and the result is empty.
    """

    def __init__(self, k: int, *, max_distance: typing.Any = MAX_DISTANCE) -> None:  # noqa: ANN401
        if k < 0:
            msg = f"k must be non-negative, got {k}"
            raise ValueError(msg)
        self.k = k
        self.max_distance = max_distance
        self.entries: list[tuple[typing.Any, int, typing.Any]] = []

    def is_full(self) -> bool:
        """Whether `k` candidates are retained."""
        return len(self.entries) >= self.k

    def consider(self, item: typing.Any, distance: typing.Any, index: int, user_data: typing.Any) -> None:  # noqa: ANN401, ARG002
        if self.k == 0:
            return
        if self.is_full():
            if not distance < self.entries[-1][0]:
                return
            self.entries.pop()
        bisect.insort_right(self.entries, (distance, index, item), key=lambda e: e[0])

    def current_best_distance(self) -> typing.Any:  # noqa: ANN401
        if self.k > 0 and self.is_full():
            return self.entries[-1][0]
        return self.max_distance

    def result(self, user_data: typing.Any) -> set[int]:  # noqa: ANN401, ARG002
        return {index for _, index, _ in self.entries}


class KNearestRanked(KNearest):
    """Like `KNearest`, but returns `(index, distance)` pairs, closest first."""

    def result(self, user_data: typing.Any) -> list[tuple[int, typing.Any]]:  # noqa: ANN401, ARG002
        return [(index, distance) for distance, index, _ in self.entries]


class NearestItems(KNearest):
    """Like `KNearest`, but returns the items themselves, closest first."""

    def result(self, user_data: typing.Any) -> list[typing.Any]:  # noqa: ANN401, ARG002
        return [item for _, _, item in self.entries]


__all__ = ["KNearest", "KNearestRanked", "NearestItems"]
