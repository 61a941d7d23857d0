"""The interface through which a search reports the candidates it visits."""

import abc
import typing

I = typing.TypeVar("I")  # noqa: E741
U = typing.TypeVar("U")
D = typing.TypeVar("D")
O = typing.TypeVar("O")  # noqa: E741


class Collector(abc.ABC, typing.Generic[I, U, D, O]):
    """Accumulates candidates during a search and produces its result.

    The search offers every vantage point it visits to `consider`, asks
    `current_best_distance` how far from the query a candidate may still be
    and matter, and calls `result` exactly once when the walk is over.

    A collector serves a single search. Subclasses only implement the three
    abstract methods; `finish` guards against reuse.
    """

    _finished: bool = False

    @abc.abstractmethod
    def consider(self, item: I, distance: D, index: int, user_data: U) -> None:
        """Offer a visited item at `distance` from the query.

        Args:
            item: The vantage point being visited.
            distance: Its distance from the query.
            index: Its position in the collection the tree was built from.
            user_data: The user data the search runs with.
        """

    @abc.abstractmethod
    def current_best_distance(self) -> D:
        """The largest distance at which a candidate could still change the result."""

    @abc.abstractmethod
    def result(self, user_data: U) -> O:
        """Produce the final output."""

    @property
    def finished(self) -> bool:
        """Whether `result` has already been produced."""
        return self._finished

    def finish(self, user_data: U) -> O:
        """Produce the result, once.

        Raises:
            RuntimeError: If the collector was already finished.
        """
        if self._finished:
            msg = f"{type(self).__name__} has already produced its result and cannot be reused"
            raise RuntimeError(msg)
        self._finished = True
        return self.result(user_data)


__all__ = ["Collector"]
