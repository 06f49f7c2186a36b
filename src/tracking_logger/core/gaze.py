from dataclasses import dataclass

from ..models import InteractionMode, Pose, Vector3
from .protocols import UIProbe, WorldProbe

NO_BUILDING = "No building"
NO_UI_ELEMENT = "No UI-Element"
VIEWPORT_CENTER = (0.5, 0.5)


@dataclass(slots=True, frozen=True)
class GazeTarget:
    name: str
    point: Vector3


class GazeResolver:
    """
    Resolves what the subject is facing.

    While the map overlay is open the name comes from the UI probe at the
    viewport centre, otherwise from the world probe. The point always comes
    from the world probe: the intersection on a hit, else the far end of the
    ray.
    """

    def __init__(
        self,
        world_probe: WorldProbe,
        ui_probe: UIProbe,
        max_distance: float = 100.0,
        viewport_center: tuple[float, float] = VIEWPORT_CENTER,
    ):
        if max_distance <= 0:
            raise ValueError("max_distance must be positive.")
        self._world_probe = world_probe
        self._ui_probe = ui_probe
        self.max_distance = max_distance
        self.viewport_center = viewport_center

    def resolve(self, mode: InteractionMode, pose: Pose) -> GazeTarget:
        forward = pose.forward
        hit = self._world_probe.raycast(pose.position, forward, self.max_distance)

        if hit is not None:
            point = hit.point
        else:
            point = pose.position + forward * self.max_distance

        if mode.map_open:
            name = self._resolve_ui_element()
        else:
            name = hit.name if hit is not None else NO_BUILDING

        return GazeTarget(name, point)

    def _resolve_ui_element(self) -> str:
        hits = self._ui_probe.raycast(self.viewport_center)
        if hits:
            return hits[0]
        return NO_UI_ELEMENT
