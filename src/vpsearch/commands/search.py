"""Running k-NN and radius searches over a vector dataset."""

import pathlib
import time

import numpy
import pandas
import typer
from tqdm import tqdm

from vpsearch.collectors import Counting
from vpsearch.collectors import KNearestRanked
from vpsearch.collectors import WithinRadius
from vpsearch.datasets import linear_knn
from vpsearch.datasets import read_pair
from vpsearch.metric import Metric
from vpsearch.metric import brute_force
from vpsearch.tree import Tree
from vpsearch.utils import configure_logging
from vpsearch.utils import resolve_output_dir


def search(  # noqa: PLR0913, PLR0915, C901
    inp_dir: pathlib.Path = typer.Option(  # noqa: B008
        ...,
        "-i",
        "--inp-dir",
        exists=True,
        file_okay=False,
        dir_okay=True,
        readable=True,
        resolve_path=True,
        help="The input directory containing `<name>-train.npy` and `<name>-test.npy`.",
    ),
    out_dir: pathlib.Path | None = typer.Option(  # noqa: B008
        None,
        "-o",
        "--out-dir",
        file_okay=False,
        dir_okay=True,
        writable=True,
        resolve_path=True,
        help="Directory to save results",
    ),
    log_dir: pathlib.Path | None = typer.Option(  # noqa: B008
        None,
        "-l",
        "--log-dir",
        file_okay=False,
        dir_okay=True,
        writable=True,
        resolve_path=True,
        help="Directory to save logs",
    ),
    data_name: str = typer.Option(
        ...,
        "-d",
        "--data-name",
        help="Name of the dataset to process.",
    ),
    metric: Metric = typer.Option(  # noqa: B008
        Metric.Euclidean,
        "-m",
        "--metric",
        help="Distance metric to index the dataset with.",
    ),
    seed: int | None = typer.Option(
        None,
        "-s",
        "--seed",
        help="Random seed for shuffling the rows of the dataset.",
    ),
    k: int = typer.Option(
        10,
        "-k",
        "--num-neighbors",
        help="Number of nearest neighbors to retrieve",
    ),
    radius: float | None = typer.Option(
        None,
        "-r",
        "--radius",
        help="Retrieve every item strictly closer than this instead of the k nearest.",
    ),
    check: bool = typer.Option(  # noqa: FBT001
        False,  # noqa: FBT003
        "-c",
        "--check",
        help="Compare the results against an exhaustive scan.",
    ),
) -> None:
    """Build a tree over the train subset and query it with every test item."""
    typer.echo("Running vantage-point tree search...")

    out_dir = resolve_output_dir(inp_dir, out_dir, "vpsearch_results")
    log_dir = resolve_output_dir(inp_dir, log_dir, "vpsearch_logs")

    logger = configure_logging("vpsearch-search", file_path=log_dir / "search.log")
    logger.info("-" * 120)  # Separator line in log file

    if not metric.is_vector():
        raise typer.BadParameter(f"Metric {metric.value} does not apply to vector datasets", param_hint="--metric")
    if k < 0:
        raise typer.BadParameter(f"k must be non-negative, got {k}", param_hint="--num-neighbors")

    rng = None
    if seed is not None:
        rng = numpy.random.default_rng(seed)
        logger.info(f"Using random seed: {seed}")

    train_data, test_data = read_pair(inp_dir, data_name, rng)
    logger.info(f"Dataset metric: {metric.value}")

    logger.info("Building tree...")
    items = list(train_data)
    start_time = time.perf_counter()
    tree = Tree.new(items, metric=metric.function())
    build_time = time.perf_counter() - start_time
    logger.info(f"Built {tree!r} in {build_time:.6f} seconds")

    mode = "knn" if radius is None else "rnn"
    logger.info(f"Starting {mode} search over {test_data.shape[0]} queries...")
    results: list = []
    visited: list[int] = []
    start_time = time.perf_counter()
    for query in tqdm(test_data, desc=f"Searching ({mode})"):
        inner = KNearestRanked(k) if radius is None else WithinRadius(radius)
        counted = tree.find_nearest_custom(query, Counting(inner))
        results.append(counted.result)
        visited.append(counted.visited)
    total_time = time.perf_counter() - start_time

    throughput = test_data.shape[0] / total_time if total_time > 0 else float("inf")
    mean_visited = float(numpy.mean(visited)) if visited else 0.0
    logger.info(f"Completed search in {total_time:.6f} seconds.")
    logger.info(f"Throughput: {throughput:.2e} queries/second.")
    logger.info(
        f"Distance computations per query: {mean_visited:.1f} "
        f"({mean_visited / train_data.shape[0]:.2%} of a linear scan)",
    )

    if radius is None:
        k_eff = min(k, train_data.shape[0])
        indices = numpy.array([[i for i, _ in r] for r in results], dtype=numpy.int64).reshape(len(results), k_eff)
        distances = numpy.array([[d for _, d in r] for r in results], dtype=numpy.float64).reshape(len(results), k_eff)

        out_path_indices = out_dir / f"{data_name}_vp_{metric.short_name()}_indices.npy"
        out_path_distances = out_dir / f"{data_name}_vp_{metric.short_name()}_distances.npy"
        numpy.save(out_path_indices, indices)
        numpy.save(out_path_distances, distances)
        logger.info(f"Saved indices to: {out_path_indices}")
        logger.info(f"Saved distances to: {out_path_distances}")

        if check:
            _, expected = linear_knn(train_data, test_data, k, metric)
            if not numpy.allclose(distances, expected):
                logger.error("Tree k-NN distances differ from the exhaustive scan")
                raise typer.Exit(code=1)
            logger.info("Tree k-NN distances match the exhaustive scan")
    else:
        rows = [(q, i) for q, found in enumerate(results) for i in sorted(found)]
        frame = pandas.DataFrame(rows, columns=["query", "index"])
        out_path = out_dir / f"{data_name}_vp_{metric.short_name()}_radius.csv"
        frame.to_csv(out_path, index=False)
        logger.info(f"Saved {len(frame)} matches to: {out_path}")

        if check:
            fn = metric.function()
            for q, (query, found) in enumerate(zip(test_data, results, strict=True)):
                dists = brute_force(items, query, fn)
                expected = {i for i, d in enumerate(dists) if d < radius}
                if found != expected:
                    logger.error(f"Tree radius search differs from the exhaustive scan for query {q}")
                    raise typer.Exit(code=1)
            logger.info("Tree radius search matches the exhaustive scan")

    logger.info("Search complete.")


__all__ = ["search"]
