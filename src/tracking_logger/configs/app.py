import logging
from enum import Enum
from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, NonNegativeInt, PositiveFloat, PositiveInt, model_validator, Field

from .utils import LoggingConfig

logger = logging.getLogger(__name__)


class Encoding(str, Enum):
    """Persisted encodings of a session log. The value is the file extension."""
    JSON = "json"
    CSV = "csv"
    PARQUET = "parquet"


class RecorderSettings(BaseModel):
    """Timing of the sampling pipeline. All durations are in seconds."""
    tick_interval_s: PositiveFloat = Field(0.25, description="Fixed interval between two samples.")
    checkpoint_period_s: PositiveFloat = Field(30.0, description="Interval between two partial writes of the session log.")
    max_gaze_distance: PositiveFloat = Field(100.0, description="Maximum length of the world gaze ray.")

    @model_validator(mode='after')
    def validate_periods(self) -> "RecorderSettings":
        if self.checkpoint_period_s < self.tick_interval_s:
            raise ValueError('Checkpoint period must not be shorter than the tick interval.')
        return self


class SceneSettings(BaseModel):
    """
    Scene identifiers with special meaning to the recorder.

    Excluded scenes produce no samples at all; the pause scene produces no
    samples but is accounted for in the session's paused duration.
    """
    excluded_scenes: list[str] = Field(default=["Tutorial"])
    pause_scene: str = Field("Pipipause")

    # Two-phase experiment: every participant visits the primary location first.
    use_category_suffix: bool = True
    primary_marker: str = Field("Schloss", description="Substring identifying primary-category scenes.")
    primary_suffix: str = Field("S", min_length=1, max_length=1)
    secondary_suffix: str = Field("M", min_length=1, max_length=1)

    @model_validator(mode='after')
    def validate_suffixes(self) -> "SceneSettings":
        if self.primary_suffix == self.secondary_suffix:
            raise ValueError('Scene category suffixes must differ.')
        return self


class IdentitySettings(BaseModel):
    policy: Literal["scan", "sentinel"] = Field(
        "scan",
        description="How to pick a participant id when none is supplied."
    )
    sentinel_id: str = "Unknown"
    file_prefix: str = "VR_VP_"


class WriterSettings(BaseModel):
    encoding: Encoding = Encoding.JSON
    indent: NonNegativeInt = Field(2, description="Indentation of the structured-document encoding.")


class GazeSettings(BaseModel):
    """Screen-space gaze point recorded while no gaze estimator is attached."""
    placeholder_screen_point: Optional[tuple[float, float]] = (0.5, 0.5)


class SimulationSettings(BaseModel):
    """Settings for the simulated host driven by the command line."""
    duration_s: PositiveFloat = 60.0
    host_rate_hz: PositiveInt = 50
    initial_scene: str = "Marktplatz"


class AppSettings(BaseSettings):
    """
    Main application settings, loaded from environment variables and defaults.
    """
    # Data
    data_dir: Path = Field(default_factory=lambda: Path.cwd() / "recordings", description="Path to directory where session files are stored.")
    participant_id: Optional[str] = None

    # Recording
    recorder: RecorderSettings = Field(default_factory=RecorderSettings)
    scenes: SceneSettings = Field(default_factory=SceneSettings)
    identity: IdentitySettings = Field(default_factory=IdentitySettings)
    gaze: GazeSettings = Field(default_factory=GazeSettings)

    # Output
    writer: WriterSettings = Field(default_factory=WriterSettings)

    # Host
    simulation: SimulationSettings = Field(default_factory=SimulationSettings)

    # Logging
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_prefix="TRACKING__",
        env_file=".env",
        env_nested_delimiter='__',
        case_sensitive=False
    )
