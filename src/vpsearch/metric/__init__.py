"""Metric spaces: the distance capability every indexed item must provide.

An item type takes part in a tree either by implementing the `MetricSpace`
protocol (a `distance(other, user_data)` method) or by having a metric callable
passed alongside it. The callable form is how foreign types such as tuples,
strings and numpy arrays are indexed without wrapping them.

Distances must satisfy the triangle inequality. In particular a metric built
from a sum of squares must take the square root; squared Euclidean distances
break the pruning in the search and silently produce wrong answers.
"""

import collections.abc
import enum
import inspect
import math
import typing

import numpy


I = typing.TypeVar("I")  # noqa: E741
U = typing.TypeVar("U")
D = typing.TypeVar("D", bound="Distance")

MAX_DISTANCE = math.inf
"""The default "infinite" distance, used as a leaf radius and an empty collector's bound."""


class Distance(typing.Protocol):
    """The numeric capabilities a distance value must have.

    Python's `int`, `float`, `fractions.Fraction` and the numpy scalar types all
    qualify.
    """

    def __lt__(self, other: typing.Any, /) -> bool: ...  # noqa: ANN401

    def __le__(self, other: typing.Any, /) -> bool: ...  # noqa: ANN401

    def __add__(self, other: typing.Any, /) -> typing.Self: ...  # noqa: ANN401

    def __sub__(self, other: typing.Any, /) -> typing.Self: ...  # noqa: ANN401


@typing.runtime_checkable
class MetricSpace(typing.Protocol[U, D]):
    """Items that know how far they are from each other.

    A class may set `MAX_DISTANCE` to a value no real distance reaches if
    `math.inf` does not suit its distance type.
    """

    def distance(self, other: typing.Self, user_data: U, /) -> D:
        """Distance between `self` and `other`, optionally using `user_data`."""
        ...


MetricFn = collections.abc.Callable[[I, I, U], D]
"""A metric callable: `metric(a, b, user_data) -> distance`."""


def _method_metric(a: MetricSpace[U, D], b: MetricSpace[U, D], user_data: U) -> D:
    return a.distance(b, user_data)


def _accepts_user_data(fn: collections.abc.Callable[..., typing.Any]) -> bool:
    """Whether `fn` expects user data as its third positional argument.

    A third positional parameter with a default (e.g. optional weights) is left
    to its default rather than filled with user data.
    """
    try:
        params = inspect.signature(fn).parameters.values()
    except (TypeError, ValueError):
        # Builtins and ufuncs without introspectable signatures.
        return True

    positional = []
    for p in params:
        if p.kind == inspect.Parameter.VAR_POSITIONAL:
            return True
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
            positional.append(p)
    return len(positional) >= 3 and positional[2].default is inspect.Parameter.empty  # noqa: PLR2004


def resolve_metric(
    metric: collections.abc.Callable[..., D] | None,
) -> MetricFn[typing.Any, typing.Any, D]:
    """Normalize a metric into a three-argument callable.

    Args:
        metric: `None` to use the items' own `distance` method, a callable
            taking `(a, b, user_data)`, or a callable taking just `(a, b)`.
            A callable whose third parameter has a default is treated as
            taking just `(a, b)`.

    Returns:
        A callable taking `(a, b, user_data)`.
    """
    if metric is None:
        return _method_metric
    if _accepts_user_data(metric):
        return metric

    def _without_user_data(a: typing.Any, b: typing.Any, _: typing.Any) -> D:  # noqa: ANN401
        return metric(a, b)

    _without_user_data.__name__ = getattr(metric, "__name__", "metric")
    return _without_user_data


def max_distance_for(items: collections.abc.Sequence[typing.Any]) -> typing.Any:  # noqa: ANN401
    """The maximum-distance sentinel for a collection of items.

    This is the `MAX_DISTANCE` attribute of the item type if it declares one,
    and `math.inf` otherwise.
    """
    if len(items) == 0:
        return MAX_DISTANCE
    return getattr(type(items[0]), "MAX_DISTANCE", MAX_DISTANCE)


def brute_force(
    items: collections.abc.Sequence[I],
    query: I,
    metric: collections.abc.Callable[..., D] | None = None,
    user_data: typing.Any = None,  # noqa: ANN401
) -> list[D]:
    """Distances from `query` to every item, in item order.

    This is the exhaustive scan that tree searches are checked against.
    """
    fn = resolve_metric(metric)
    return [fn(query, item, user_data) for item in items]


def _as_vector(x: typing.Any) -> numpy.ndarray:  # noqa: ANN401
    return numpy.asarray(x, dtype=numpy.float64)


def euclidean(a: typing.Any, b: typing.Any, _: typing.Any = None) -> float:  # noqa: ANN401
    """L2 distance between two vectors."""
    diff = _as_vector(a) - _as_vector(b)
    return float(numpy.sqrt(numpy.dot(diff, diff)))


def manhattan(a: typing.Any, b: typing.Any, _: typing.Any = None) -> float:  # noqa: ANN401
    """L1 distance between two vectors."""
    return float(numpy.sum(numpy.abs(_as_vector(a) - _as_vector(b))))


def chebyshev(a: typing.Any, b: typing.Any, _: typing.Any = None) -> float:  # noqa: ANN401
    """L-infinity distance between two vectors."""
    diff = numpy.abs(_as_vector(a) - _as_vector(b))
    return float(numpy.max(diff)) if diff.size else 0.0


def hamming(a: collections.abc.Sequence, b: collections.abc.Sequence, _: typing.Any = None) -> int:  # noqa: ANN401
    """Number of positions at which two equal-length sequences differ."""
    if len(a) != len(b):
        msg = f"Hamming distance needs equal lengths, got {len(a)} and {len(b)}"
        raise ValueError(msg)
    return sum(1 for x, y in zip(a, b, strict=True) if x != y)


def levenshtein(a: collections.abc.Sequence, b: collections.abc.Sequence, _: typing.Any = None) -> int:  # noqa: ANN401
    """Edit distance with unit-cost insertions, deletions and substitutions."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, x in enumerate(a, start=1):
        current = [i]
        for j, y in enumerate(b, start=1):
            current.append(min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + (x != y),
            ))
        previous = current
    return previous[-1]


class Metric(enum.StrEnum):
    """Enum of the ready-made distance metrics."""

    Euclidean = "euclidean"
    Manhattan = "manhattan"
    Chebyshev = "chebyshev"
    Hamming = "hamming"
    Levenshtein = "levenshtein"

    def function(self) -> collections.abc.Callable[..., typing.Any]:
        """Get the callable implementing the metric."""
        if self == Metric.Euclidean:
            return euclidean
        if self == Metric.Manhattan:
            return manhattan
        if self == Metric.Chebyshev:
            return chebyshev
        if self == Metric.Hamming:
            return hamming
        if self == Metric.Levenshtein:
            return levenshtein
        raise ValueError(f"Unknown metric: {self.value}")

    def short_name(self) -> str:
        """Get the short name of the metric."""
        if self == Metric.Euclidean:
            return "euc"
        if self == Metric.Manhattan:
            return "man"
        if self == Metric.Chebyshev:
            return "che"
        if self == Metric.Hamming:
            return "ham"
        if self == Metric.Levenshtein:
            return "lev"
        raise ValueError(f"Unknown metric: {self.value}")

    def is_vector(self) -> bool:
        """Whether the metric applies to numeric vectors."""
        return self in {Metric.Euclidean, Metric.Manhattan, Metric.Chebyshev}

    @staticmethod
    def from_name(name: str) -> "Metric":
        """Get the Metric enum member from its name."""
        name = name.lower()
        for metric in Metric:
            if metric.value == name or metric.short_name() == name:
                return metric
        raise ValueError(f"Unknown metric name: {name}")


__all__ = [
    "MAX_DISTANCE",
    "Distance",
    "Metric",
    "MetricFn",
    "MetricSpace",
    "brute_force",
    "chebyshev",
    "euclidean",
    "hamming",
    "levenshtein",
    "manhattan",
    "max_distance_for",
    "resolve_metric",
]
