from .vector import Vector3, forward_from_euler
from .sample import ControllerState, EventSample, InteractionMode, Pose
from .session import SessionLog

__all__ = [
    "ControllerState",
    "EventSample",
    "InteractionMode",
    "Pose",
    "SessionLog",
    "Vector3",
    "forward_from_euler",
]
