"""Configuration for tourmap sessions.

`RenderConfig` carries the view settings of one map session and validates them
on construction. Colors are normalized to ``0xRRGGBB`` form here, so the render
builder can emit them without further checks.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from tourmap.exceptions import InvalidColor, UnsupportedMode
from tourmap.model.location import Location

DIRECTIONS_URL = "https://maps.googleapis.com/maps/api/directions/json"
STATIC_MAP_URL = "https://maps.googleapis.com/maps/api/staticmap"

TRAVEL_MODES = ("driving", "walking", "bicycling", "transit")

DEFAULT_MAP_WIDTH = 500
DEFAULT_MAP_HEIGHT = 500
DEFAULT_PATH_COLOR = "0x000000"
DEFAULT_POINT_COLOR = "0xFF0000"
DEFAULT_TRAVEL_MODE = "walking"

# The service limit is 8192; the rest is headroom
MAX_URL_CHARS = 8000

MIN_ZOOM = 0
MAX_ZOOM = 21

# Known-good request used to probe credentials
VALIDATION_ORIGIN = (-74.65219, 40.35025)
VALIDATION_DESTINATION = (-74.65904, 40.34187)
VALIDATION_RENDER_PARAMS = {"center": "Princeton,NJ", "zoom": "13", "size": "500x500"}

_COLOR_RE = re.compile(r"^(?:0[xX]|#)([0-9a-fA-F]{6})$")


def normalize_color(value: str) -> str:
    """Return ``value`` as an ``0xRRGGBB`` color string.

    Args:
        value: Hex color with an ``0x``, ``0X`` or ``#`` prefix.

    Returns:
        The color with an ``0x`` prefix and uppercase digits.

    Raises:
        InvalidColor: If ``value`` is not six hex digits with a known prefix.
    """
    match = _COLOR_RE.match(value) if isinstance(value, str) else None
    if match is None:
        raise InvalidColor(
            f"Color must be a hex number of the form 0x123ABC or #123ABC, got {value!r}"
        )
    return "0x" + match.group(1).upper()


def validate_travel_mode(mode: str) -> str:
    """Return ``mode`` lowercased if the routing service supports it.

    Raises:
        UnsupportedMode: If ``mode`` is not one of `TRAVEL_MODES`.
    """
    normalized = mode.lower() if isinstance(mode, str) else mode
    if normalized not in TRAVEL_MODES:
        raise UnsupportedMode(
            f"Travel mode {mode!r} is not supported; use one of {', '.join(TRAVEL_MODES)}"
        )
    return normalized


def _check_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    return value


def validate_zoom(zoom: Optional[int]) -> Optional[int]:
    """Return ``zoom`` if it is None (auto) or an integer in [0, 21]."""
    if zoom is None:
        return None
    if isinstance(zoom, bool) or not isinstance(zoom, int):
        raise ValueError(f"Zoom must be an integer or None, got {zoom!r}")
    if not MIN_ZOOM <= zoom <= MAX_ZOOM:
        raise ValueError(f"Zoom must be within [{MIN_ZOOM}, {MAX_ZOOM}], got {zoom}")
    return zoom


@dataclass
class RenderConfig:
    """View and routing settings of a map session.

    Attributes:
        width: Canvas width in pixels; non-positive values mean the default.
        height: Canvas height in pixels; non-positive values mean the default.
        point_color: Marker color.
        path_color: Route line color.
        zoom: Fixed zoom level, or None to let the renderer fit the content.
        travel_mode: Routing mode used for every path.
        center: Optional fixed map center.
        show_points: Whether member locations are drawn as markers.
        max_chars: Maximum length of a composed render request.
    """

    width: int = DEFAULT_MAP_WIDTH
    height: int = DEFAULT_MAP_HEIGHT
    point_color: str = DEFAULT_POINT_COLOR
    path_color: str = DEFAULT_PATH_COLOR
    zoom: Optional[int] = None
    travel_mode: str = DEFAULT_TRAVEL_MODE
    center: Optional[Location] = None
    show_points: bool = True
    max_chars: int = MAX_URL_CHARS

    def __post_init__(self) -> None:
        self.set_screen_size(self.width, self.height)
        self.point_color = normalize_color(self.point_color)
        self.path_color = normalize_color(self.path_color)
        self.zoom = validate_zoom(self.zoom)
        self.travel_mode = validate_travel_mode(self.travel_mode)
        if self.center is not None:
            self.center = Location.coerce(self.center)
        if not isinstance(self.show_points, bool):
            raise ValueError(f"show_points must be true or false, got {self.show_points!r}")
        if _check_int("max_chars", self.max_chars) <= 0:
            raise ValueError(f"max_chars must be positive, got {self.max_chars}")

    def set_screen_size(self, width: int, height: int) -> None:
        """Set the canvas size, keeping defaults for non-positive values.

        Raises:
            ValueError: If either dimension is not an integer.
        """
        _check_int("width", width)
        _check_int("height", height)
        self.width = width if width > 0 else DEFAULT_MAP_WIDTH
        self.height = height if height > 0 else DEFAULT_MAP_HEIGHT


def config_from_dict(data: Optional[Dict[str, Any]]) -> RenderConfig:
    """Build a `RenderConfig` from a plain mapping.

    Args:
        data: Mapping with keys named after `RenderConfig` fields. ``center``
            is given as ``[lng, lat]``.

    Returns:
        Validated configuration.

    Raises:
        ValueError: If the mapping contains unknown keys.
    """
    if not data:
        return RenderConfig()
    if not isinstance(data, dict):
        raise ValueError(f"Configuration must be a mapping, got {type(data).__name__}")

    known = {f.name for f in fields(RenderConfig)}
    unknown = sorted(str(k) for k in data if k not in known)
    if unknown:
        raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")

    kwargs = dict(data)
    if kwargs.get("center") is not None:
        kwargs["center"] = Location.coerce(kwargs["center"])
    return RenderConfig(**kwargs)


def load_config(path: Union[str, Path]) -> RenderConfig:
    """Load a `RenderConfig` from a YAML file."""
    with open(path, "r", encoding="utf8") as fd:
        data = yaml.safe_load(fd)
    return config_from_dict(data)
