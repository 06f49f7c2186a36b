import logging
import math
import time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from ..core.protocols import Collaborators, RayHit
from ..models import ControllerState, Pose, Vector3

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class Building:
    name: str
    center: Vector3
    radius: float


DEFAULT_BUILDINGS: tuple[Building, ...] = (
    Building("Rathaus", Vector3(0.0, 5.0, 0.0), 6.0),
    Building("Kirche", Vector3(30.0, 8.0, 10.0), 5.0),
    Building("Brunnen", Vector3(-15.0, 1.0, 20.0), 2.0),
    Building("Turm", Vector3(5.0, 12.0, -35.0), 4.0),
)


class SimulatedSubject:
    """
    A subject walking a circular path for development and testing.

    Implements the pose, scene and controller sources. The subject walks
    counter-clockwise around the origin looking along its path, pulls the
    trigger (opening the map) for two seconds out of every ten, and spends
    the configured pause window in the pause scene.
    """

    def __init__(
        self,
        scene_schedule: Sequence[tuple[float, str]] = ((0.0, "Tutorial"), (2.0, "Marktplatz")),
        radius: float = 18.0,
        speed: float = 0.02,
        eye_height: float = 1.7,
        now_func: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            scene_schedule: (start offset in seconds, scene id) pairs in ascending order.
            radius: Radius of the walking circle.
            speed: Revolutions per second along the circle.
            eye_height: Constant height of the tracked head.
        """
        if not scene_schedule:
            raise ValueError("scene_schedule needs at least one entry.")
        self._schedule = sorted(scene_schedule)
        self._radius = radius
        self._speed = speed
        self._eye_height = eye_height
        self._now = now_func
        self._start = now_func()

    def _elapsed(self) -> float:
        return self._now() - self._start

    def current_scene(self) -> str:
        elapsed = self._elapsed()
        scene = self._schedule[0][1]
        for offset, scene_id in self._schedule:
            if elapsed >= offset:
                scene = scene_id
        return scene

    def current_pose(self) -> Pose:
        angle = self._elapsed() * self._speed * 2 * math.pi
        position = Vector3(
            self._radius * math.cos(angle),
            self._eye_height,
            self._radius * math.sin(angle),
        )
        # Counter-clockwise tangent, expressed as a yaw about +Y from +Z
        yaw = math.degrees(math.atan2(-math.sin(angle), math.cos(angle)))
        pitch = 5.0 * math.sin(angle * 3)
        return Pose(position, Vector3(pitch % 360.0, yaw % 360.0, 0.0))

    def read_controls(self) -> ControllerState:
        elapsed = self._elapsed()
        trigger = 1.0 if elapsed % 10.0 >= 8.0 else 0.0
        # Joystick pushed forward while walking, released every 15 seconds for 3 seconds
        stick = 0.0 if elapsed % 15.0 >= 12.0 else 0.8
        return ControllerState(trigger, (0.0, stick))


class SimulatedWorld:
    """World probe over a handful of spherical buildings."""

    def __init__(self, buildings: Sequence[Building] = DEFAULT_BUILDINGS):
        self.buildings = tuple(buildings)

    def raycast(self, origin: Vector3, direction: Vector3, max_distance: float) -> Optional[RayHit]:
        nearest: Optional[tuple[float, Building]] = None

        for building in self.buildings:
            distance = self._intersect(origin, direction, building)
            if distance is None or distance > max_distance:
                continue
            if nearest is None or distance < nearest[0]:
                nearest = (distance, building)

        if nearest is None:
            return None
        distance, building = nearest
        return RayHit(building.name, origin + direction * distance)

    @staticmethod
    def _intersect(origin: Vector3, direction: Vector3, building: Building) -> Optional[float]:
        # Ray-sphere intersection, direction is a unit vector
        ox = origin.x - building.center.x
        oy = origin.y - building.center.y
        oz = origin.z - building.center.z
        b = ox * direction.x + oy * direction.y + oz * direction.z
        c = ox * ox + oy * oy + oz * oz - building.radius ** 2
        disc = b * b - c
        if disc < 0:
            return None

        root = math.sqrt(disc)
        near, far = -b - root, -b + root
        if near >= 0:
            return near
        if far >= 0:
            return far  # origin inside the sphere
        return None


class SimulatedMap:
    """UI probe for a map overlay covering the centre of the viewport."""

    def __init__(self, elements: Sequence[tuple[str, tuple[float, float, float, float]]] = (
        ("MarkerRathaus", (0.45, 0.45, 0.55, 0.55)),
        ("MapImage", (0.1, 0.1, 0.9, 0.9)),
    )):
        """
        Args:
            elements: (name, (x_min, y_min, x_max, y_max)) in normalized screen
                      coordinates, topmost first.
        """
        self.elements = tuple(elements)

    def raycast(self, screen_point: tuple[float, float]) -> list[str]:
        x, y = screen_point
        return [
            name for name, (x0, y0, x1, y1) in self.elements
            if x0 <= x <= x1 and y0 <= y <= y1
        ]


def create_simulated_collaborators(
    initial_scene: str = "Marktplatz",
    duration_s: float = 60.0,
    pause_scene: str = "Pipipause",
    now_func: Callable[[], float] = time.monotonic,
) -> Collaborators:
    """
    Wires a complete simulated host: a short tutorial, the initial scene, a
    pause in the middle third of the session, then the initial scene again.
    """
    schedule = (
        (0.0, "Tutorial"),
        (min(2.0, duration_s / 10), initial_scene),
        (duration_s / 3, pause_scene),
        (duration_s / 3 + min(5.0, duration_s / 10), initial_scene),
    )
    subject = SimulatedSubject(scene_schedule=schedule, now_func=now_func)
    logger.info(f"Simulated environment ready. Scene schedule: {schedule}")

    return Collaborators(
        pose=subject,
        scene=subject,
        controls=subject,
        world_probe=SimulatedWorld(),
        ui_probe=SimulatedMap(),
    )
