from dataclasses import dataclass
from typing import Optional, Protocol, Sequence, runtime_checkable

from ..models import ControllerState, Pose, Vector3


@dataclass(slots=True, frozen=True)
class RayHit:
    """Result of a world raycast: the struck object and the intersection point."""
    name: str
    point: Vector3


@runtime_checkable
class PoseSource(Protocol):
    def current_pose(self) -> Pose: ...


@runtime_checkable
class SceneSource(Protocol):
    def current_scene(self) -> str: ...


@runtime_checkable
class ControlSource(Protocol):
    def read_controls(self) -> ControllerState: ...


@runtime_checkable
class WorldProbe(Protocol):
    """
    Casts a ray against world geometry.
    Returns None when nothing is struck within max_distance.
    """
    def raycast(self, origin: Vector3, direction: Vector3, max_distance: float) -> Optional[RayHit]: ...


@runtime_checkable
class UIProbe(Protocol):
    """
    Casts a ray through a normalized screen point against the active overlay.
    Returns the names of the elements hit, topmost first.
    """
    def raycast(self, screen_point: tuple[float, float]) -> Sequence[str]: ...


@runtime_checkable
class GazeEstimator(Protocol):
    def screen_point(self) -> Optional[tuple[float, float]]: ...


@dataclass(slots=True)
class Collaborators:
    """Everything the host provides to the recorder."""
    pose: PoseSource
    scene: SceneSource
    controls: ControlSource
    world_probe: WorldProbe
    ui_probe: UIProbe
    gaze_estimator: Optional[GazeEstimator] = None
