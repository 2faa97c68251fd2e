"""Map extent and static map request composition."""

from tourmap.render.bounds import compute_bounds, find_center, fit_zoom
from tourmap.render.request import RenderRequest, build_render_url, compose_render_request

__all__ = [
    "compute_bounds",
    "find_center",
    "fit_zoom",
    "RenderRequest",
    "build_render_url",
    "compose_render_request",
]
