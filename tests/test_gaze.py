import pytest

from tracking_logger.core import NO_BUILDING, NO_UI_ELEMENT, GazeResolver, RayHit
from tracking_logger.models import InteractionMode, Pose, Vector3

from conftest import FakeMap, FakeWorld


def test_world_hit_reports_object_and_point():
    world = FakeWorld(RayHit("Tower", Vector3(1, 2, 3)))
    resolver = GazeResolver(world, FakeMap())

    target = resolver.resolve(InteractionMode.NONE, Pose())

    assert target.name == "Tower"
    assert target.point == Vector3(1, 2, 3)


def test_world_miss_extrapolates_far_point():
    world = FakeWorld()
    resolver = GazeResolver(world, FakeMap(), max_distance=100.0)

    target = resolver.resolve(InteractionMode.JOYSTICK, Pose())

    assert target.name == NO_BUILDING
    assert target.point == Vector3(0.0, 0.0, 100.0)
    origin, direction, max_distance = world.calls[0]
    assert origin == Vector3(0.0, 0.0, 0.0)
    assert direction == Vector3(0.0, 0.0, 1.0)
    assert max_distance == 100.0


def test_world_miss_uses_subject_position_and_heading():
    resolver = GazeResolver(FakeWorld(), FakeMap(), max_distance=10.0)
    pose = Pose(Vector3(2.0, 1.0, 0.0), Vector3(0.0, 90.0, 0.0))

    point = resolver.resolve(InteractionMode.NONE, pose).point

    assert point.x == pytest.approx(12.0)
    assert point.y == pytest.approx(1.0)
    assert point.z == pytest.approx(0.0, abs=1e-9)


@pytest.mark.parametrize("mode", [InteractionMode.TRIGGER, InteractionMode.TRIGGER_AND_JOYSTICK])
def test_open_map_names_topmost_ui_element(mode):
    ui_map = FakeMap(["Marker", "MapImage"])
    resolver = GazeResolver(FakeWorld(RayHit("Tower", Vector3(1, 2, 3))), ui_map)

    target = resolver.resolve(mode, Pose())

    assert target.name == "Marker"
    assert ui_map.calls == [(0.5, 0.5)]


def test_open_map_keeps_world_point():
    resolver = GazeResolver(FakeWorld(RayHit("Tower", Vector3(1, 2, 3))), FakeMap(["MapImage"]))

    target = resolver.resolve(InteractionMode.TRIGGER, Pose())

    assert target.point == Vector3(1, 2, 3)


def test_open_map_without_ui_hit_uses_sentinel():
    resolver = GazeResolver(FakeWorld(), FakeMap())

    target = resolver.resolve(InteractionMode.TRIGGER, Pose())

    assert target.name == NO_UI_ELEMENT
    assert target.point == Vector3(0.0, 0.0, 100.0)


def test_closed_map_never_queries_ui():
    ui_map = FakeMap(["MapImage"])
    resolver = GazeResolver(FakeWorld(), ui_map)

    resolver.resolve(InteractionMode.NONE, Pose())

    assert ui_map.calls == []


def test_rejects_non_positive_distance():
    with pytest.raises(ValueError):
        GazeResolver(FakeWorld(), FakeMap(), max_distance=0)
