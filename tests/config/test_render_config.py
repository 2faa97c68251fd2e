"""Tests for `tourmap.config` validation and YAML loading."""

from pathlib import Path

import pytest

from tourmap.config import (
    DEFAULT_MAP_HEIGHT,
    DEFAULT_MAP_WIDTH,
    MAX_URL_CHARS,
    RenderConfig,
    config_from_dict,
    load_config,
    normalize_color,
    validate_travel_mode,
    validate_zoom,
)
from tourmap.exceptions import InvalidColor, InvalidCoordinate, UnsupportedMode
from tourmap.model.location import Location


def test_defaults() -> None:
    config = RenderConfig()
    assert (config.width, config.height) == (500, 500)
    assert config.point_color == "0xFF0000"
    assert config.path_color == "0x000000"
    assert config.zoom is None
    assert config.travel_mode == "walking"
    assert config.center is None
    assert config.show_points is True
    assert config.max_chars == MAX_URL_CHARS == 8000


@pytest.mark.parametrize(
    "value,expected",
    [("0x12abEF", "0x12ABEF"), ("0X000000", "0x000000"), ("#ff8800", "0xFF8800")],
)
def test_normalize_color(value: str, expected: str) -> None:
    assert normalize_color(value) == expected


@pytest.mark.parametrize("value", ["red", "0x12345", "#1234567", "123456", "0xGGGGGG", None])
def test_invalid_colors(value) -> None:
    with pytest.raises(InvalidColor):
        normalize_color(value)


def test_travel_modes() -> None:
    assert validate_travel_mode("TRANSIT") == "transit"
    with pytest.raises(UnsupportedMode):
        validate_travel_mode("sailing")


@pytest.mark.parametrize("zoom", [-1, 22, 1.5, True, "3"])
def test_invalid_zoom(zoom) -> None:
    with pytest.raises(ValueError):
        validate_zoom(zoom)


def test_zoom_bounds_are_inclusive() -> None:
    assert validate_zoom(0) == 0
    assert validate_zoom(21) == 21
    assert validate_zoom(None) is None


def test_non_positive_size_uses_defaults() -> None:
    config = RenderConfig(width=0, height=-10)
    assert (config.width, config.height) == (DEFAULT_MAP_WIDTH, DEFAULT_MAP_HEIGHT)
    config.set_screen_size(800, 0)
    assert (config.width, config.height) == (800, DEFAULT_MAP_HEIGHT)


@pytest.mark.parametrize(
    "field,value",
    [
        ("width", "640"),
        ("height", 480.0),
        ("width", True),
        ("max_chars", "8000"),
        ("show_points", "yes"),
        ("show_points", 1),
    ],
)
def test_field_types_are_checked(field: str, value) -> None:
    with pytest.raises(ValueError, match=field):
        RenderConfig(**{field: value})


def test_set_screen_size_rejects_non_integers() -> None:
    config = RenderConfig()
    with pytest.raises(ValueError):
        config.set_screen_size("800", 600)
    assert (config.width, config.height) == (500, 500)


def test_construction_validates() -> None:
    with pytest.raises(InvalidColor):
        RenderConfig(path_color="black")
    with pytest.raises(UnsupportedMode):
        RenderConfig(travel_mode="flying")
    with pytest.raises(ValueError):
        RenderConfig(max_chars=0)
    with pytest.raises(InvalidCoordinate):
        RenderConfig(center=(0.0, 90.0))


def test_config_from_dict() -> None:
    config = config_from_dict(
        {"width": 640, "point_color": "#00FF00", "center": [-74.65, 40.35], "zoom": 14}
    )
    assert config.width == 640
    assert config.point_color == "0x00FF00"
    assert config.center == Location(-74.65, 40.35)
    assert config.zoom == 14
    assert config_from_dict(None) == RenderConfig()


def test_config_from_dict_rejects_unknown_keys() -> None:
    with pytest.raises(ValueError, match="colour"):
        config_from_dict({"colour": "0x000000"})
    with pytest.raises(ValueError):
        config_from_dict(["width", 100])


def test_load_config_from_yaml(tmp_path: Path) -> None:
    path = tmp_path / "view.yaml"
    path.write_text(
        "width: 800\n"
        "height: 600\n"
        "path_color: '0x0000FF'\n"
        "travel_mode: bicycling\n"
        "show_points: false\n"
        "center: [-74.65219, 40.35025]\n"
    )
    config = load_config(path)
    assert (config.width, config.height) == (800, 600)
    assert config.path_color == "0x0000FF"
    assert config.travel_mode == "bicycling"
    assert config.show_points is False
    assert config.center == Location(-74.65219, 40.35025)


def test_load_empty_yaml_gives_defaults(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(path) == RenderConfig()
