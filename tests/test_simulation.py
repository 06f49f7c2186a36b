import pytest

from tracking_logger.acquisition import (
    Building,
    SimulatedMap,
    SimulatedSubject,
    SimulatedWorld,
    create_simulated_collaborators,
)
from tracking_logger.core import SessionRecorder
from tracking_logger.models import InteractionMode, Vector3


class ManualClock:
    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


def test_world_hits_nearest_building():
    world = SimulatedWorld([
        Building("Far", Vector3(0.0, 0.0, 30.0), 2.0),
        Building("Near", Vector3(0.0, 0.0, 10.0), 2.0),
    ])

    hit = world.raycast(Vector3(), Vector3(0.0, 0.0, 1.0), 100.0)

    assert hit.name == "Near"
    assert hit.point == Vector3(0.0, 0.0, 8.0)


def test_world_respects_max_distance():
    world = SimulatedWorld([Building("Near", Vector3(0.0, 0.0, 10.0), 2.0)])

    assert world.raycast(Vector3(), Vector3(0.0, 0.0, 1.0), 5.0) is None


def test_world_miss_and_behind():
    world = SimulatedWorld([Building("Near", Vector3(0.0, 0.0, 10.0), 2.0)])

    assert world.raycast(Vector3(), Vector3(1.0, 0.0, 0.0), 100.0) is None
    assert world.raycast(Vector3(), Vector3(0.0, 0.0, -1.0), 100.0) is None


def test_world_ray_from_inside_building():
    world = SimulatedWorld([Building("Hall", Vector3(), 5.0)])

    hit = world.raycast(Vector3(), Vector3(0.0, 0.0, 1.0), 100.0)

    assert hit.point == Vector3(0.0, 0.0, 5.0)


def test_map_returns_topmost_first():
    ui = SimulatedMap()

    assert ui.raycast((0.5, 0.5)) == ["MarkerRathaus", "MapImage"]
    assert ui.raycast((0.2, 0.2)) == ["MapImage"]
    assert ui.raycast((0.05, 0.5)) == []


def test_subject_follows_scene_schedule(clock):
    subject = SimulatedSubject(now_func=clock)

    assert subject.current_scene() == "Tutorial"
    clock.now = 2.0
    assert subject.current_scene() == "Marktplatz"


def test_subject_walks_circle_at_eye_height(clock):
    subject = SimulatedSubject(radius=10.0, eye_height=1.6, now_func=clock)

    pose = subject.current_pose()

    assert pose.position.x == pytest.approx(10.0)
    assert pose.position.y == 1.6
    assert pose.position.z == pytest.approx(0.0)


def test_subject_controller_pattern(clock):
    subject = SimulatedSubject(now_func=clock)

    clock.now = 1.0
    assert subject.read_controls().trigger == 0.0
    clock.now = 9.0
    assert subject.read_controls().trigger == 1.0
    clock.now = 13.0
    assert subject.read_controls().joystick_magnitude == 0.0


def test_subject_rejects_empty_schedule():
    with pytest.raises(ValueError):
        SimulatedSubject(scene_schedule=())


def test_collaborators_schedule_contains_pause(clock):
    collaborators = create_simulated_collaborators(duration_s=30.0, now_func=clock)
    scene = collaborators.scene

    observed = []
    for t in (1.0, 5.0, 11.0, 20.0):
        clock.now = t
        observed.append(scene.current_scene())

    assert observed == ["Tutorial", "Marktplatz", "Pipipause", "Marktplatz"]
    assert collaborators.gaze_estimator is None


def test_recorder_over_simulated_host(clock, settings):
    collaborators = create_simulated_collaborators(duration_s=30.0, now_func=clock)
    recorder = SessionRecorder(collaborators, settings, now_func=clock)
    recorder.start("3")

    while clock.now < 30.0:
        clock.now += 0.05
        recorder.update()
    assert recorder.finalize() is True

    log = recorder.log
    assert len(log) > 0
    assert log.paused_duration > 0.0
    assert {s.scene_id for s in log} == {"Marktplatz"}
    assert InteractionMode.TRIGGER_AND_JOYSTICK in {s.interaction_mode for s in log}
    assert recorder.writer.read(recorder.output_path).samples == log.samples
