"""Commands for building and querying trees over datasets on disk."""

from . import generate
from . import inspect
from . import search

__all__ = ["generate", "inspect", "search"]
