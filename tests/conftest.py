from pathlib import Path
from typing import Optional

import pytest

from tracking_logger.configs import AppSettings
from tracking_logger.core import Collaborators, RayHit, SessionRecorder
from tracking_logger.models import ControllerState, EventSample, InteractionMode, Pose, Vector3
from tracking_logger.writers import FileStorage


class FakeSubject:
    """Pose, scene and controller source whose readings tests set directly."""

    def __init__(self, scene: str = "Marktplatz"):
        self.scene = scene
        self.pose = Pose(Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, 0.0))
        self.controls = ControllerState()
        self.scene_reads = 0

    def current_scene(self) -> str:
        self.scene_reads += 1
        return self.scene

    def current_pose(self) -> Pose:
        return self.pose

    def read_controls(self) -> ControllerState:
        return self.controls


class FakeWorld:
    def __init__(self, hit: Optional[RayHit] = None):
        self.hit = hit
        self.calls = []

    def raycast(self, origin, direction, max_distance):
        self.calls.append((origin, direction, max_distance))
        return self.hit


class FakeMap:
    def __init__(self, hits=()):
        self.hits = list(hits)
        self.calls = []

    def raycast(self, screen_point):
        self.calls.append(screen_point)
        return list(self.hits)


class FakeEstimator:
    def __init__(self, point):
        self.point = point

    def screen_point(self):
        return self.point


class FlakyStorage(FileStorage):
    """FileStorage that raises OSError on writes while `failing` is set."""

    def __init__(self, failing: bool = False):
        self.failing = failing
        self.writes = 0

    def write_bytes(self, path: Path, data: bytes) -> None:
        if self.failing:
            raise OSError("disk unavailable")
        self.writes += 1
        super().write_bytes(path, data)


def make_sample(index: int = 0, participant_id: str = "7", **overrides) -> EventSample:
    fields = dict(
        participant_id=participant_id,
        timestamp=index * 0.25,
        position=Vector3(1.5 + index, 1.7, -3.25),
        orientation_euler=Vector3(10.0, 270.5, 0.0),
        interaction_mode=InteractionMode.JOYSTICK,
        map_open=False,
        gaze_target_name="Rathaus",
        gaze_target_point=Vector3(0.1, 5.0, 0.3333333333333333),
        gaze_screen_point=(0.5, 0.5),
        scene_id="Marktplatz",
    )
    fields.update(overrides)
    return EventSample(**fields)


@pytest.fixture
def settings(tmp_path: Path) -> AppSettings:
    return AppSettings(data_dir=tmp_path / "recordings", _env_file=None)


@pytest.fixture
def subject() -> FakeSubject:
    return FakeSubject()


@pytest.fixture
def world() -> FakeWorld:
    return FakeWorld()


@pytest.fixture
def ui_map() -> FakeMap:
    return FakeMap()


@pytest.fixture
def collaborators(subject, world, ui_map) -> Collaborators:
    return Collaborators(
        pose=subject,
        scene=subject,
        controls=subject,
        world_probe=world,
        ui_probe=ui_map,
    )


@pytest.fixture
def make_recorder(collaborators, settings):
    def _make(**kwargs) -> SessionRecorder:
        kwargs.setdefault("settings", settings)
        return SessionRecorder(collaborators, **kwargs)
    return _make
