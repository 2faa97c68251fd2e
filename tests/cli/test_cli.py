import io
import json
from pathlib import Path

import pytest

from tourmap import cli
from tourmap.config import STATIC_MAP_URL
from tourmap.model.location import Location
from tourmap.session import MapSession

TOUR = "600 400\n0 0\n0.001 0\n0.001 0.002\n"
KEYS = ["--render-key", "r-key", "--routing-key", "k-key"]


@pytest.fixture
def fake_sessions(monkeypatch, transport):
    """Route every CLI session through the in-memory transport."""

    def _create(config=None):
        return MapSession(config=config, transport=transport)

    monkeypatch.setattr(cli, "create_session", _create)
    monkeypatch.delenv(cli.RENDER_KEY_ENV, raising=False)
    monkeypatch.delenv(cli.ROUTING_KEY_ENV, raising=False)
    return transport


@pytest.fixture
def tour_file(tmp_path: Path) -> Path:
    path = tmp_path / "tour.txt"
    path.write_text(TOUR)
    return path


# Render command


def test_render_prints_url_and_summary(fake_sessions, tour_file, capsys) -> None:
    cli.main(["render", str(tour_file), *KEYS, "--skip-validation"])
    out = capsys.readouterr().out
    url = out.splitlines()[0]

    assert url.startswith(STATIC_MAP_URL + "?size=600x400")
    assert url.count("&markers=") == 3
    assert url.count("&path=") == 3
    assert url.endswith("&key=r-key")
    assert "Points" in out and "Legs" in out
    assert "0.4 miles" in out
    # Three points, three legs, no credential probe
    assert len(fake_sessions.calls) == 3
    assert fake_sessions.status_calls == []


def test_render_validates_keys_by_default(fake_sessions, tour_file, capsys) -> None:
    cli.main(["render", str(tour_file), *KEYS])
    assert len(fake_sessions.status_calls) == 1
    assert len(fake_sessions.calls) == 4


def test_render_options(fake_sessions, tour_file, capsys) -> None:
    cli.main(
        [
            "render",
            str(tour_file),
            *KEYS,
            "--skip-validation",
            "--no-points",
            "--zoom",
            "12",
            "--center",
            "0.5,0.5",
            "--mode",
            "driving",
        ]
    )
    url = capsys.readouterr().out.splitlines()[0]
    assert "markers=" not in url
    assert "&center=0.5,0.5" in url
    assert "&zoom=12" in url
    assert all(params["mode"] == "driving" for _, params in fake_sessions.calls)


def test_render_writes_results(fake_sessions, tour_file, tmp_path: Path) -> None:
    results = tmp_path / "out" / "tour.json"
    cli.main(["render", str(tour_file), *KEYS, "--skip-validation", "-r", str(results)])

    data = json.loads(results.read_text())
    assert data["url"].startswith(STATIC_MAP_URL)
    assert data["points"] == [[0.0, 0.0], [0.001, 0.0], [0.001, 0.002]]
    assert data["travel_mode"] == "walking"
    assert data["summary"]["paths"] == 3
    assert data["summary"]["distance_m"] == 600
    assert data["dropped_markers"] == 0 and data["dropped_paths"] == 0


def test_render_reads_keys_from_environment(
    fake_sessions, tour_file, monkeypatch, capsys
) -> None:
    monkeypatch.setenv(cli.RENDER_KEY_ENV, "env-render")
    monkeypatch.setenv(cli.ROUTING_KEY_ENV, "env-routing")
    cli.main(["render", str(tour_file), "--skip-validation"])
    assert capsys.readouterr().out.splitlines()[0].endswith("&key=env-render")
    assert fake_sessions.calls[0][1]["key"] == "env-routing"


def test_render_from_stdin(fake_sessions, monkeypatch, capsys) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("500 500\n0 0\n0.001 0\n"))
    cli.main(["render", *KEYS, "--skip-validation"])
    url = capsys.readouterr().out.splitlines()[0]
    assert url.count("&path=") == 1


def test_render_empty_tour(fake_sessions, tmp_path: Path, capsys) -> None:
    path = tmp_path / "empty.txt"
    path.write_text("500 500\n")
    cli.main(["render", str(path)])
    assert capsys.readouterr().out.strip() == "Empty"


def test_render_without_keys_fails(fake_sessions, tour_file, capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["render", str(tour_file)])
    assert exc_info.value.code == 1
    assert "NotConfigured" in capsys.readouterr().err


def test_render_missing_file(fake_sessions, tmp_path: Path, capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["render", str(tmp_path / "nope.txt"), *KEYS])
    assert exc_info.value.code == 1
    assert "File not found" in capsys.readouterr().err


def test_render_malformed_input(fake_sessions, tmp_path: Path, capsys) -> None:
    path = tmp_path / "bad.txt"
    path.write_text("500 500\n1.0 north\n")
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["render", str(path), *KEYS])
    assert exc_info.value.code == 1
    assert "Line 2" in capsys.readouterr().err


def test_render_out_of_bounds_point(fake_sessions, tmp_path: Path, capsys) -> None:
    path = tmp_path / "far.txt"
    path.write_text("500 500\n0 0\n0 89\n")
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["render", str(path), *KEYS, "--skip-validation"])
    assert exc_info.value.code == 1
    assert "InvalidCoordinate" in capsys.readouterr().err


# Distance command


def test_distance(fake_sessions, capsys) -> None:
    cli.main(["distance", "0", "0", "0.001", "0", *KEYS, "--skip-validation"])
    assert capsys.readouterr().out.strip() == "100 m (0.1 miles)"


def test_distance_without_route(fake_sessions, make_status, capsys) -> None:
    fake_sessions.set_response(
        Location(0.0, 0.0), Location(0.001, 0.0), make_status("ZERO_RESULTS")
    )
    cli.main(["distance", "0", "0", "0.001", "0", *KEYS, "--skip-validation"])
    assert capsys.readouterr().out.strip() == "No route"


# Argument handling


def test_no_arguments_prints_help(capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.main([])
    assert exc_info.value.code == 0
    assert "usage: tourmap" in capsys.readouterr().out


def test_invalid_center_is_usage_error(fake_sessions, tour_file) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["render", str(tour_file), "--center", "east"])
    assert exc_info.value.code == 2


def test_invalid_mode_is_usage_error(fake_sessions, tour_file) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["render", str(tour_file), "--mode", "flying"])
    assert exc_info.value.code == 2


def test_config_with_bad_field_type_fails_cleanly(fake_sessions, tmp_path: Path, capsys) -> None:
    config = tmp_path / "view.yaml"
    config.write_text("width: '640'\n")
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["distance", "0", "0", "0.001", "0", *KEYS, "--config", str(config)])
    assert exc_info.value.code == 1
    assert "width must be an integer" in capsys.readouterr().err
