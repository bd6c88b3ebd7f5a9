from .map import Map, map
from .reduce import Reduce, reduce
from .source import Source, source

__all__ = [
    "Map",
    "Reduce",
    "Source",
    "map",
    "reduce",
    "source",
]
