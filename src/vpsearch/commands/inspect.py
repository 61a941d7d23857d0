"""Writing out the structure of a tree built over a vector dataset."""

import pathlib

import typer

from vpsearch import debug
from vpsearch.datasets import Subset
from vpsearch.datasets import read_subset
from vpsearch.metric import Metric
from vpsearch.tree import Tree
from vpsearch.utils import configure_logging
from vpsearch.utils import resolve_output_dir


def inspect_tree(
    inp_dir: pathlib.Path = typer.Option(  # noqa: B008
        ...,
        "-i",
        "--inp-dir",
        exists=True,
        file_okay=False,
        dir_okay=True,
        readable=True,
        resolve_path=True,
        help="The input directory containing `<name>-train.npy`.",
    ),
    out_dir: pathlib.Path | None = typer.Option(  # noqa: B008
        None,
        "-o",
        "--out-dir",
        file_okay=False,
        dir_okay=True,
        writable=True,
        resolve_path=True,
        help="Directory to save the tree description to.",
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
) -> None:
    """Build a tree over the train subset and save its DOT graph, node records and properties."""
    out_dir = resolve_output_dir(inp_dir, out_dir, "vpsearch_tree")
    logger = configure_logging("vpsearch-inspect")

    if not metric.is_vector():
        raise typer.BadParameter(f"Metric {metric.value} does not apply to vector datasets", param_hint="--metric")

    data = read_subset(inp_dir, data_name, Subset.Train)
    tree = Tree.new(list(data), metric=metric.function())
    logger.info(f"Built {tree!r}")

    dot_path = out_dir / f"{data_name}-tree.dot"
    dot_path.write_text(debug.to_dot(tree, label=lambda node: str(node.index)))
    logger.info(f"Saved DOT graph to {dot_path}")

    json_path = out_dir / f"{data_name}-tree.json"
    json_path.write_text(debug.to_json(tree))
    logger.info(f"Saved node records to {json_path}")

    csv_path = out_dir / f"{data_name}-tree.csv"
    debug.tree_properties(tree).to_csv(csv_path, index=False)
    logger.info(f"Saved tree properties to {csv_path}")

    typer.echo(f"Wrote {dot_path.name}, {json_path.name} and {csv_path.name} to {out_dir}")


__all__ = ["inspect_tree"]
