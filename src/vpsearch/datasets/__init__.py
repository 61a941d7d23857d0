"""Helpers for reading, writing and generating vector datasets.

A dataset named `name` lives in a directory as `name-train.npy` (the items to
index) and `name-test.npy` (the queries).
"""

import enum
import logging
import pathlib

import numpy

from vpsearch.metric import Metric
from vpsearch.metric import brute_force

logger = logging.getLogger(__name__)


class Subset(enum.StrEnum):
    """The two halves of a dataset."""

    Train = "train"
    Test = "test"


def subset_path(base_dir: pathlib.Path, name: str, subset: Subset) -> pathlib.Path:
    """Get the path to the specified subset of a dataset."""
    return base_dir / f"{name}-{subset.value}.npy"


def read_subset(
    base_dir: pathlib.Path,
    name: str,
    subset: Subset,
    rng: numpy.random.Generator | None = None,
) -> numpy.ndarray:
    """Read the specified subset of a dataset.

    Arguments:
        base_dir: The directory where the dataset files are located.
        name: The name of the dataset.
        subset: Which half to read.
        rng: A random number generator for shuffling the rows. If None, no shuffling is done.

    Returns:
        The data as a 2-D NumPy array.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file does not hold a 2-D array.
    """
    path = subset_path(base_dir, name, subset)
    if not path.exists():
        raise FileNotFoundError(f"Dataset file not found: {path}")
    data = numpy.load(path)
    if data.ndim != 2:  # noqa: PLR2004
        raise ValueError(f"Expected a 2-D array in {path}, got shape {data.shape}")
    if rng is not None:
        rng.shuffle(data)
    logger.info(f"Read {subset.value} subset of {name} with shape {data.shape}, dtype {data.dtype}")
    return data


def read_pair(
    base_dir: pathlib.Path,
    name: str,
    rng: numpy.random.Generator | None = None,
) -> tuple[numpy.ndarray, numpy.ndarray]:
    """Read the train and test subsets, checking that their dimensions agree."""
    train = read_subset(base_dir, name, Subset.Train, rng)
    test = read_subset(base_dir, name, Subset.Test, rng)
    if train.shape[1] != test.shape[1]:
        raise ValueError(f"Train and test dimensions differ: {train.shape[1]} != {test.shape[1]}")
    return train, test


def generate(
    num_items: int,
    dim: int,
    rng: numpy.random.Generator,
    *,
    low: float = 0.0,
    high: float = 1.0,
) -> numpy.ndarray:
    """Uniformly random points in a `dim`-dimensional box."""
    if num_items <= 0 or dim <= 0:
        raise ValueError(f"num_items and dim must be positive, got {num_items} and {dim}")
    return rng.uniform(low, high, size=(num_items, dim)).astype(numpy.float32)


def save_pair(base_dir: pathlib.Path, name: str, train: numpy.ndarray, test: numpy.ndarray) -> None:
    """Write the train and test subsets of a dataset."""
    base_dir.mkdir(parents=True, exist_ok=True)
    for subset, data in ((Subset.Train, train), (Subset.Test, test)):
        path = subset_path(base_dir, name, subset)
        numpy.save(path, data)
        logger.info(f"Saved {subset.value} subset of {name} with shape {data.shape} to {path}")


def linear_knn(
    train: numpy.ndarray,
    test: numpy.ndarray,
    k: int,
    metric: Metric,
) -> tuple[numpy.ndarray, numpy.ndarray]:
    """Exact k-NN by exhaustive scan, the reference for tree searches.

    Returns:
        `(indices, distances)`, each of shape `(len(test), min(k, len(train)))`,
        sorted by ascending distance. Ties keep ascending index order.
    """
    k_eff = min(k, train.shape[0])
    fn = metric.function()
    indices = numpy.zeros((test.shape[0], k_eff), dtype=numpy.int64)
    distances = numpy.zeros((test.shape[0], k_eff), dtype=numpy.float64)
    for row, query in enumerate(test):
        dists = numpy.asarray(brute_force(train, query, fn), dtype=numpy.float64)
        order = numpy.argsort(dists, kind="stable")[:k_eff]
        indices[row] = order
        distances[row] = dists[order]
    return indices, distances


__all__ = [
    "Subset",
    "generate",
    "linear_knn",
    "read_pair",
    "read_subset",
    "save_pair",
    "subset_path",
]
