"""Plotting node properties vs depth."""

# pyright: reportUnknownMemberType=false, reportUnknownLambdaType=false

import enum
import pathlib

import pandas
import plotly.express as px
import typer

from vpsearch.debug import PROPERTY_COLUMNS


class PlottableColumns(enum.StrEnum):
    """Columns that may be plotted on the y-axis against depth on the x-axis."""

    Cardinality = "cardinality"
    Radius = "radius"


def depth_statistics(tree_props: pandas.DataFrame, column: PlottableColumns) -> pandas.DataFrame:
    """Summary statistics of one column per depth, in long format.

    Leaves are dropped first since their radius is the maximum sentinel.

    Returns:
        A dataframe with columns `depth`, `statistic` and the column's name.
    """
    tree_props = tree_props[tree_props["num_children"] > 0]
    filtered_props = tree_props[["depth", column.value]]
    filtered_props = filtered_props.groupby("depth").agg(
        min=(column.value, "min"),
        p25=(column.value, lambda x: x.quantile(0.25)),
        median=(column.value, "median"),
        p75=(column.value, lambda x: x.quantile(0.75)),
        max=(column.value, "max"),
    ).reset_index()

    return filtered_props.melt(
        id_vars="depth",
        var_name="statistic",
        value_name=column.value,
    )


def plot_tree_properties(
    csv_path: pathlib.Path = typer.Option(  # noqa: B008
        ...,
        "-i",
        "--inp-path",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
        help="CSV file of tree properties written by the `inspect` command.",
    ),
    plots_dir: pathlib.Path = typer.Option(  # noqa: B008
        ...,
        "-p",
        "--plots-dir",
        file_okay=False,
        dir_okay=True,
        writable=True,
        resolve_path=True,
        help="Directory to save the plots.",
    ),
    log_scale: bool = typer.Option(  # noqa: FBT001
        True,  # noqa: FBT003
        "--log-scale/--linear-scale",
        help="Use a log scale for the y-axis.",
    ),
) -> None:
    """Plot node cardinality and radius vs depth."""
    tree_props = pandas.read_csv(csv_path)
    # Check if all expected columns are present
    missing_columns = [col for col in PROPERTY_COLUMNS if col not in tree_props.columns]
    if missing_columns:
        raise ValueError(f"Missing columns in {csv_path}: {missing_columns}")

    tree_props["radius"] = tree_props["radius"].astype(float)
    typer.echo(f"Read {len(tree_props)} rows from {csv_path}")

    name = csv_path.stem
    plots_dir.mkdir(parents=True, exist_ok=True)
    for y_axis in PlottableColumns:
        df_melted = depth_statistics(tree_props, y_axis)
        fig = px.line(
            df_melted,
            x="depth",
            y=y_axis.value,
            color="statistic",
            title=f"{y_axis.value} vs Depth ({name})",
            labels={"depth": "Depth", y_axis.value: y_axis.value, "statistic": "Statistic"},
        )
        fig.update_layout(template="plotly_white")
        if log_scale:
            fig.update_yaxes(type="log")

        plot_path = plots_dir / f"{name}-{y_axis.value}-vs-depth.html"
        fig.write_html(plot_path)
        typer.echo(f"Plot saved to {plot_path}")


__all__ = ["PlottableColumns", "depth_statistics", "plot_tree_properties"]
