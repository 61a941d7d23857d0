"""Vantage-point trees for exact nearest-neighbor search in metric spaces."""

import typer

from . import collectors
from . import commands
from . import datasets
from . import debug
from . import metric
from . import models
from . import plots
from . import tree
from . import utils
from .collectors import Collector
from .collectors import KNearest
from .collectors import Nearest
from .collectors import WithinRadius
from .metric import Metric
from .metric import MetricSpace
from .tree import Ownership
from .tree import Tree

app = typer.Typer()
app.command(name="search")(commands.search.search)
app.command(name="inspect")(commands.inspect.inspect_tree)
app.command(name="generate")(commands.generate.generate_dataset)
app.add_typer(plots.app, name="plots")

__all__ = [
    "Collector",
    "KNearest",
    "Metric",
    "MetricSpace",
    "Nearest",
    "Ownership",
    "Tree",
    "WithinRadius",
    "app",
    "collectors",
    "commands",
    "datasets",
    "debug",
    "metric",
    "models",
    "plots",
    "tree",
    "utils",
]
