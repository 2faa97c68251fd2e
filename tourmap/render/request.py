"""Composition of the static map request.

The request carries the canvas size, one marker per member location, one
encoded path per visible path, and the trailing map type, zoom and key. It must
stay within a fixed length budget. The trailing parameters are reserved first;
markers and then paths are appended whole while they fit, and whatever does not
fit is left out.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple
from urllib.parse import urlencode

from tourmap.config import STATIC_MAP_URL, RenderConfig
from tourmap.exceptions import NotConfigured, RenderBudgetExceeded
from tourmap.graph.path_graph import PathGraph
from tourmap.logging import get_logger

logger = get_logger(__name__)

MAP_TYPE = "roadmap"
PATH_WEIGHT = 3
FIRST_MARKER_SIZE = "mid"
MARKER_SIZE = "tiny"

# Kept literal in values; "|" is sent as %7C
_SAFE_CHARS = ":,"


@dataclass(frozen=True)
class RenderRequest:
    """A composed render request.

    Attributes:
        url: Full request URL, at most the configured budget long.
        markers: Number of markers included.
        paths: Number of visible paths included.
        dropped_markers: Markers left out to stay within budget.
        dropped_paths: Visible paths left out to stay within budget.
    """

    url: str
    markers: int
    paths: int
    dropped_markers: int = 0
    dropped_paths: int = 0


def _param(name: str, value: str, first: bool = False) -> str:
    return ("?" if first else "&") + urlencode([(name, value)], safe=_SAFE_CHARS)


def _append_within(
    parts: List[str], used: int, candidates: Sequence[str], budget: int
) -> Tuple[int, int]:
    """Append whole candidates while they fit; return (used, appended)."""
    appended = 0
    for segment in candidates:
        if used + len(segment) > budget:
            break
        parts.append(segment)
        used += len(segment)
        appended += 1
    return used, appended


def compose_render_request(
    graph: PathGraph,
    config: RenderConfig,
    api_key: Optional[str],
    base_url: str = STATIC_MAP_URL,
) -> RenderRequest:
    """Compose the render request for ``graph`` under ``config``.

    Args:
        graph: Path graph providing the markers and visible paths.
        config: View settings, including the length budget.
        api_key: Render credential.
        base_url: Static map endpoint.

    Returns:
        The composed request.

    Raises:
        NotConfigured: If the graph has no points or no key is given.
        RenderBudgetExceeded: If the size and trailing parameters alone
            exceed the budget.
    """
    if not graph.is_set:
        raise NotConfigured("Locations not set; add points before rendering the map")
    if not api_key:
        raise NotConfigured("Static map API key is not set")

    head = base_url + _param("size", f"{config.width}x{config.height}", first=True)

    tail_parts = []
    if config.center is not None:
        tail_parts.append(_param("center", str(config.center)))
    tail_parts.append(_param("maptype", MAP_TYPE))
    if config.zoom is not None:
        tail_parts.append(_param("zoom", str(config.zoom)))
    tail_parts.append(_param("key", api_key))
    tail = "".join(tail_parts)

    budget = config.max_chars
    used = len(head) + len(tail)
    if used > budget:
        raise RenderBudgetExceeded(
            f"Render request needs {used} characters before any marker; budget is {budget}"
        )

    markers = []
    if config.show_points:
        for i, location in enumerate(graph.members):
            size = FIRST_MARKER_SIZE if i == 0 else MARKER_SIZE
            markers.append(
                _param("markers", f"size:{size}|color:{config.point_color}|{location}")
            )

    path_segments = []
    for path in graph.visible:
        token = path.get_path_id()
        assert token is not None
        path_segments.append(
            _param(
                "path",
                f"weight:{PATH_WEIGHT}|color:{config.path_color}ff|enc:{token}",
            )
        )

    parts = [head]
    used, marker_count = _append_within(parts, used, markers, budget)
    used, path_count = _append_within(parts, used, path_segments, budget)
    parts.append(tail)

    dropped_markers = len(markers) - marker_count
    dropped_paths = len(path_segments) - path_count
    if dropped_markers or dropped_paths:
        logger.debug(
            "Render budget of %d reached: dropped %d markers and %d paths",
            budget,
            dropped_markers,
            dropped_paths,
        )

    return RenderRequest(
        url="".join(parts),
        markers=marker_count,
        paths=path_count,
        dropped_markers=dropped_markers,
        dropped_paths=dropped_paths,
    )


def build_render_url(
    graph: PathGraph,
    config: RenderConfig,
    api_key: Optional[str],
    base_url: str = STATIC_MAP_URL,
) -> str:
    """Return only the URL of `compose_render_request`."""
    return compose_render_request(graph, config, api_key, base_url).url
