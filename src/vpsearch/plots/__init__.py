"""Utilities for plotting the shape of a tree."""

import typer

from . import tree_properties

app = typer.Typer()
app.command(name="tree-properties")(tree_properties.plot_tree_properties)

__all__ = ["app", "tree_properties"]
