from .app import (
    AppSettings,
    Encoding,
    GazeSettings,
    IdentitySettings,
    RecorderSettings,
    SceneSettings,
    SimulationSettings,
    WriterSettings,
)
from .utils import LoggingConfig

__all__ = [
    "AppSettings",
    "Encoding",
    "GazeSettings",
    "IdentitySettings",
    "LoggingConfig",
    "RecorderSettings",
    "SceneSettings",
    "SimulationSettings",
    "WriterSettings",
]
