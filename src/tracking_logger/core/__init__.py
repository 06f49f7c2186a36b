from .classifier import InputClassifier
from .gaze import NO_BUILDING, NO_UI_ELEMENT, GazeResolver, GazeTarget
from .protocols import (
    Collaborators,
    ControlSource,
    GazeEstimator,
    PoseSource,
    RayHit,
    SceneSource,
    UIProbe,
    WorldProbe,
)
from .recorder import SessionRecorder
from .runner import SessionRunner
from .scheduler import CheckpointScheduler
from .state import RecorderState

__all__ = [
    "CheckpointScheduler",
    "Collaborators",
    "ControlSource",
    "GazeEstimator",
    "GazeResolver",
    "GazeTarget",
    "InputClassifier",
    "NO_BUILDING",
    "NO_UI_ELEMENT",
    "PoseSource",
    "RayHit",
    "RecorderState",
    "SceneSource",
    "SessionRecorder",
    "SessionRunner",
    "UIProbe",
    "WorldProbe",
]
