"""Generating random datasets to experiment with."""

import pathlib

import numpy
import typer

from vpsearch.datasets import generate
from vpsearch.datasets import save_pair


def generate_dataset(
    out_dir: pathlib.Path = typer.Option(  # noqa: B008
        ...,
        "-o",
        "--out-dir",
        file_okay=False,
        dir_okay=True,
        writable=True,
        resolve_path=True,
        help="Directory to save the dataset to.",
    ),
    data_name: str = typer.Option(
        "uniform",
        "-d",
        "--data-name",
        help="Name of the dataset.",
    ),
    num_train: int = typer.Option(
        10_000,
        "-n",
        "--num-train",
        help="Number of items to index.",
    ),
    num_test: int = typer.Option(
        100,
        "-q",
        "--num-test",
        help="Number of queries.",
    ),
    dim: int = typer.Option(
        8,
        "-D",
        "--dim",
        help="Dimensionality of the points.",
    ),
    seed: int = typer.Option(
        42,
        "-s",
        "--seed",
        help="Random seed for reproducibility",
    ),
) -> None:
    """Write uniformly random train and test points."""
    rng = numpy.random.default_rng(seed)
    try:
        train = generate(num_train, dim, rng)
        test = generate(num_test, dim, rng)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e
    save_pair(out_dir, data_name, train, test)
    typer.echo(f"Generated {data_name} with {num_train} train and {num_test} test points of dimension {dim}")


__all__ = ["generate_dataset"]
