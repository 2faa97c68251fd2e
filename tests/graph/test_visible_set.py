"""Tests for VisibleSet membership rules."""

import pytest

from tourmap.exceptions import InfeasiblePath, UnknownEndpoint
from tourmap.graph.visible import VisibleSet
from tourmap.model.location import Location
from tourmap.model.path import BoundingBox, Path

A = Location(1.0, 1.0)
B = Location(2.0, 2.0)
C = Location(3.0, 3.0)
OUTSIDE = Location(9.0, 9.0)


def route(a, b, distance=10.0):
    box = BoundingBox.from_point(a).union(BoundingBox.from_point(b))
    return Path(a, b, True, distance, 5.0, box, f"{a}|{b}")


@pytest.fixture
def visible():
    members = {A, B, C}
    return VisibleSet(members.__contains__)


def test_add_and_iterate_in_insertion_order(visible):
    visible.add(route(B, C))
    visible.add(route(A, B))
    assert [p.key for p in visible] == [(B, C), (A, B)]
    assert visible.is_set


def test_adding_equal_path_twice_keeps_one(visible):
    visible.add(route(A, B))
    visible.add(route(B, A))
    assert len(visible) == 1
    assert route(B, A) in visible


def test_infeasible_path_rejected(visible):
    with pytest.raises(InfeasiblePath):
        visible.add(Path.infeasible(A, B))
    assert not visible.is_set


def test_non_member_endpoint_rejected(visible):
    with pytest.raises(UnknownEndpoint):
        visible.add(route(A, OUTSIDE))


def test_path_from_a_member_to_itself_rejected(visible):
    with pytest.raises(UnknownEndpoint):
        visible.add(route(A, A))
    with pytest.raises(UnknownEndpoint):
        visible.set_paths([route(A, B), route(B, B)])
    assert len(visible) == 0


def test_self_loop_query_cannot_become_visible(graph):
    a, b = Location(0.0, 0.0), Location(0.001, 0.0)
    graph.set_points([a, b])
    with pytest.raises(UnknownEndpoint):
        graph.visible.add(graph.get_path(a, a))
    graph.add_visible_path(a, b)

    graph.change_travel_mode("driving")

    assert graph.client.travel_mode == "driving"
    assert [p.mode for p in graph.visible] == ["driving"]


def test_remove_ignores_absent_paths(visible):
    visible.add(route(A, B))
    visible.remove(route(B, C))
    visible.remove(route(B, A))
    assert len(visible) == 0


def test_set_paths_validates_before_replacing(visible):
    visible.add(route(A, B))
    with pytest.raises(InfeasiblePath):
        visible.set_paths([route(B, C), Path.infeasible(A, C)])
    assert visible.keys() == [(A, B)]

    visible.set_paths([route(B, C), route(C, B)])
    assert visible.keys() == [(B, C)]

    visible.set_paths(None)
    assert len(visible) == 0


def test_replace_only_updates_existing_keys(visible):
    visible.add(route(A, B))
    visible.replace(route(A, B, distance=99.0))
    visible.replace(route(A, C))
    [path] = list(visible)
    assert path.get_distance() == 99.0


def test_discard_touching_returns_dropped(visible):
    visible.add(route(A, B))
    visible.add(route(B, C))
    visible.add(route(A, C))
    dropped = visible.discard_touching(B)
    assert {p.key for p in dropped} == {(A, B), (B, C)}
    assert visible.keys() == [(A, C)]
