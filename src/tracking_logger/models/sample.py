import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .vector import Vector3, forward_from_euler


class InteractionMode(str, Enum):
    """
    Discrete classification of simultaneous trigger/joystick activation.

    The values are the labels written to session files.
    """
    NONE = "No Input"
    TRIGGER = "Trigger"
    JOYSTICK = "Joystick"
    TRIGGER_AND_JOYSTICK = "Trigger + Joystick"

    @property
    def map_open(self) -> bool:
        # Holding the trigger opens the map overlay, regardless of the joystick.
        return self in (InteractionMode.TRIGGER, InteractionMode.TRIGGER_AND_JOYSTICK)


@dataclass(slots=True, frozen=True)
class ControllerState:
    """Raw controller readings for one tick."""
    trigger: float = 0.0
    joystick: tuple[float, float] = (0.0, 0.0)

    @property
    def joystick_magnitude(self) -> float:
        return math.hypot(*self.joystick)


@dataclass(slots=True, frozen=True)
class Pose:
    """Position and Euler orientation (degrees) of the tracked subject."""
    position: Vector3 = field(default_factory=Vector3)
    orientation_euler: Vector3 = field(default_factory=Vector3)

    @property
    def forward(self) -> Vector3:
        return forward_from_euler(self.orientation_euler)


@dataclass(slots=True, frozen=True)
class EventSample:
    """
    A standardized, immutable record of one recorder tick.

    This object is the canonical representation of a sample as it flows
    from the recorder into the session log and out to the encoders.
    """
    participant_id: str
    timestamp: float
    position: Vector3
    orientation_euler: Vector3
    interaction_mode: InteractionMode
    map_open: bool
    gaze_target_name: str
    gaze_target_point: Vector3
    gaze_screen_point: Optional[tuple[float, float]]
    scene_id: str
