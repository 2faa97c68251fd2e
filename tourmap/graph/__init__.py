"""Path graph and visible path set."""

from tourmap.graph.path_graph import PathGraph
from tourmap.graph.visible import VisibleSet

__all__ = ["PathGraph", "VisibleSet"]
