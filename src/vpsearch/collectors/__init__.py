"""Result collectors: what a search keeps from the nodes it visits."""

from .base import Collector
from .counting import Counted
from .counting import Counting
from .k_nearest import KNearest
from .k_nearest import KNearestRanked
from .k_nearest import NearestItems
from .nearest import Nearest
from .radius import WithinRadius

__all__ = [
    "Collector",
    "Counted",
    "Counting",
    "KNearest",
    "KNearestRanked",
    "Nearest",
    "NearestItems",
    "WithinRadius",
]
