"""Command-line interface for tourmap."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from time import perf_counter
from typing import Any, Dict, List, Optional, TextIO, Tuple

from tourmap.config import TRAVEL_MODES, RenderConfig, load_config, validate_travel_mode
from tourmap.exceptions import InfeasiblePath, NotConfigured, TourMapError
from tourmap.logging import get_logger, set_global_log_level
from tourmap.model.location import Location
from tourmap.session import MapSession, create_session
from tourmap.summary import format_distance

logger = get_logger(__name__)

RENDER_KEY_ENV = "TOURMAP_RENDER_KEY"
ROUTING_KEY_ENV = "TOURMAP_ROUTING_KEY"


def _format_table(
    headers: List[str],
    rows: List[List[str]],
    min_width: int = 8,
) -> str:
    """Format data as a simple ASCII table.

    Args:
        headers: Column headers
        rows: Data rows
        min_width: Minimum column width

    Returns:
        Formatted table string
    """
    if not rows:
        return ""

    all_data = [headers] + rows
    col_widths = []
    for col_idx in range(len(headers)):
        max_width = max(len(str(row[col_idx])) for row in all_data)
        col_widths.append(max(max_width, min_width))

    def format_row(row_data: List[str]) -> str:
        return "   " + " | ".join(
            f"{str(item):<{col_widths[i]}}" for i, item in enumerate(row_data)
        )

    lines = [format_row(headers)]
    lines.append("   " + "-+-".join("-" * width for width in col_widths))
    for row in rows:
        lines.append(format_row(row))
    return "\n".join(lines)


def _format_duration(seconds: float) -> str:
    """Return a concise human-readable duration string.

    Examples:
        0.123 -> "123.0 ms"; 1.234 -> "1.23 s"; 75.2 -> "1m 15.2s".
    """
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    if seconds < 60.0:
        return f"{seconds:.2f} s"
    minutes = int(seconds // 60)
    rem = seconds - minutes * 60
    return f"{minutes}m {rem:.1f}s"


def _parse_center(value: str) -> Location:
    """Parse ``"lng,lat"`` for argparse."""
    try:
        lng, lat = (float(part) for part in value.split(","))
        return Location(lng, lat)
    except (ValueError, TourMapError) as exc:
        raise argparse.ArgumentTypeError(f"invalid center {value!r}: {exc}") from exc


def read_tour_input(stream: TextIO) -> Tuple[int, int, List[Tuple[float, float]]]:
    """Read ``width height`` followed by one ``x y`` pair per line.

    Text after the two coordinates on a point line is ignored.

    Returns:
        Canvas width, canvas height and the points in input order.

    Raises:
        ValueError: If the header or a point line is malformed.
    """
    lines = [line.split() for line in stream.read().splitlines()]
    lines = [tokens for tokens in lines if tokens]
    if not lines:
        raise ValueError("Input is empty; expected 'width height' on the first line")

    header = lines[0]
    if len(header) < 2:
        raise ValueError("First line must hold the canvas width and height")
    width, height = int(header[0]), int(header[1])

    points = []
    for number, tokens in enumerate(lines[1:], start=2):
        if len(tokens) < 2:
            raise ValueError(f"Line {number}: expected two coordinates")
        try:
            points.append((float(tokens[0]), float(tokens[1])))
        except ValueError as exc:
            raise ValueError(f"Line {number}: {exc}") from exc
    return width, height, points


def mark_closed_tour(session: MapSession) -> int:
    """Mark the closed tour through the points, in insertion order, visible.

    Legs without a route are skipped with a warning.

    Returns:
        Number of legs marked visible.
    """
    points = session.points
    if len(points) < 2:
        return 0
    # Two points close the tour with a single leg
    legs = len(points) if len(points) > 2 else 1
    marked = 0
    for i in range(legs):
        start = points[i]
        end = points[(i + 1) % len(points)]
        try:
            session.graph.add_visible_path(start, end)
            marked += 1
        except InfeasiblePath:
            logger.warning("No route between %s and %s; leg not drawn", start, end)
    return marked


def _resolve_keys(args: argparse.Namespace) -> Tuple[str, str]:
    render_key = args.render_key or os.environ.get(RENDER_KEY_ENV, "")
    routing_key = args.routing_key or os.environ.get(ROUTING_KEY_ENV, "")
    if not render_key or not routing_key:
        raise NotConfigured(
            f"API keys not set; pass --render-key/--routing-key or set "
            f"{RENDER_KEY_ENV}/{ROUTING_KEY_ENV}"
        )
    return render_key, routing_key


def _build_session(args: argparse.Namespace) -> MapSession:
    config = load_config(args.config) if args.config else RenderConfig()
    if args.mode:
        config.travel_mode = validate_travel_mode(args.mode)
    session = create_session(config)
    render_key, routing_key = _resolve_keys(args)
    session.set_api_keys(render_key, routing_key, validate=not args.skip_validation)
    return session


def _run_render(args: argparse.Namespace) -> None:
    """Build the tour map from input points and print its request URL."""
    _start_time = perf_counter()

    if args.input is None or str(args.input) == "-":
        width, height, points = read_tour_input(sys.stdin)
    else:
        with open(args.input, "r", encoding="utf8") as fd:
            width, height, points = read_tour_input(fd)
    if not points:
        print("Empty")
        return

    session = _build_session(args)
    session.set_map_screen_size(width, height)
    if args.no_points:
        session.set_show_points(False)
    if args.zoom is not None:
        session.set_zoom(args.zoom)
    if args.center is not None:
        session.set_map_center(args.center.lng, args.center.lat)

    logger.info("Resolving paths between %d points", len(points))
    session.set_points(points)
    legs = mark_closed_tour(session)
    request = session.render_request()
    summary = session.summary()

    print(request.url)
    print(
        _format_table(
            ["Points", "Legs", "Distance", "Time"],
            [
                [
                    str(len(session.points)),
                    str(legs),
                    summary.distance_text,
                    summary.duration_text or "-",
                ]
            ],
        )
    )
    if request.dropped_markers or request.dropped_paths:
        print(
            f"Note: {request.dropped_markers} markers and {request.dropped_paths} "
            f"paths left out to fit the request length limit"
        )

    if args.results:
        results: Dict[str, Any] = {
            "url": request.url,
            "points": [list(p.as_tuple()) for p in session.points],
            "travel_mode": session.client.travel_mode,
            "summary": summary.as_dict(),
            "dropped_markers": request.dropped_markers,
            "dropped_paths": request.dropped_paths,
        }
        args.results.parent.mkdir(parents=True, exist_ok=True)
        args.results.write_text(json.dumps(results, indent=2))
        logger.info("Results written to: %s", args.results)

    logger.info(
        "Map composed with %d routing requests in %s",
        session.client.resolutions,
        _format_duration(perf_counter() - _start_time),
    )


def _run_distance(args: argparse.Namespace) -> None:
    """Print the routed distance between two points."""
    session = _build_session(args)
    meters = session.get_map_distance(args.lng1, args.lat1, args.lng2, args.lat2)
    if meters < 0:
        print("No route")
        return
    print(f"{meters:.0f} m ({format_distance(meters)})")


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``tourmap`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="tourmap",
        description="Draw routed tours between points on a static map.",
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{render,distance}",
        help="Available commands",
    )

    render_parser = subparsers.add_parser(
        "render", help="Compose the map request for a closed tour"
    )
    render_parser.add_argument(
        "input",
        nargs="?",
        type=Path,
        default=None,
        help="File with 'width height' then one 'x y' point per line (default: stdin)",
    )
    render_parser.add_argument(
        "--no-points", action="store_true", help="Do not draw point markers"
    )
    render_parser.add_argument(
        "--zoom", type=int, default=None, help="Fixed zoom level (default: automatic)"
    )
    render_parser.add_argument(
        "--center",
        type=_parse_center,
        default=None,
        help="Fixed map center as LNG,LAT",
    )
    render_parser.add_argument(
        "--results",
        "-r",
        type=Path,
        default=None,
        help="Also write the URL and summary to this JSON file",
    )

    distance_parser = subparsers.add_parser(
        "distance", help="Print the routed distance between two points"
    )
    for name in ("lng1", "lat1", "lng2", "lat2"):
        distance_parser.add_argument(name, type=float)

    for p in (render_parser, distance_parser):
        p.add_argument(
            "--mode", choices=TRAVEL_MODES, default=None, help="Travel mode"
        )
        p.add_argument(
            "--config", "-c", type=Path, default=None, help="YAML view configuration"
        )
        p.add_argument("--render-key", default=None, help="Static map API key")
        p.add_argument("--routing-key", default=None, help="Directions API key")
        p.add_argument(
            "--skip-validation",
            action="store_true",
            help="Do not probe the services to check the keys",
        )

    effective_args = sys.argv[1:] if argv is None else argv

    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if args.verbose:
        set_global_log_level(logging.DEBUG)
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)
    else:
        set_global_log_level(logging.INFO)

    try:
        if args.command == "render":
            _run_render(args)
        elif args.command == "distance":
            _run_distance(args)
    except FileNotFoundError as e:
        logger.error(f"File not found: {e.filename}")
        print(f"ERROR: File not found: {e.filename}", file=sys.stderr)
        sys.exit(1)
    except (TourMapError, ValueError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        print(f"ERROR: {type(e).__name__}: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
