"""NetworkX export of a path graph.

Example:
    >>> from tourmap.lib.nx import to_networkx
    >>> G = to_networkx(session.graph)
    >>> G.edges[a, b]["distance"]
    1234.0
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import networkx as nx

if TYPE_CHECKING:
    from tourmap.graph.path_graph import PathGraph


def to_networkx(graph: "PathGraph") -> nx.Graph:
    """Convert a `PathGraph` into an undirected ``networkx.Graph``.

    Nodes are the member locations, with ``lng``, ``lat`` and the insertion
    ``order`` as attributes. Every resolved path becomes an edge carrying
    ``distance`` and ``duration`` (-1 when infeasible), ``feasible``,
    ``visible`` and the encoded ``geometry``.

    Args:
        graph: Source path graph.

    Returns:
        A new graph; later changes to ``graph`` are not reflected.
    """
    G = nx.Graph()
    for order, location in enumerate(graph.members):
        G.add_node(location, lng=location.lng, lat=location.lat, order=order)

    for path in graph.paths():
        G.add_edge(
            path.start,
            path.end,
            distance=path.get_distance(),
            duration=path.get_time(),
            feasible=path.feasible,
            visible=path in graph.visible,
            geometry=path.get_path_id(),
        )
    return G
