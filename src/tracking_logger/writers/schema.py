"""
Flat, one-row-per-sample layout shared by the tabular encodings.

Column order is part of the file format: the CSV header and the Parquet
schema are both generated from FLAT_COLUMNS.
"""
from typing import Any, Final, Mapping, Optional

from ..models import EventSample, InteractionMode, Vector3

FLAT_COLUMNS: Final[tuple[str, ...]] = (
    "participant_id",
    "timestamp",
    "pos_x",
    "pos_y",
    "pos_z",
    "rot_x",
    "rot_y",
    "rot_z",
    "interaction_mode",
    "map_open",
    "gaze_target_name",
    "gaze_target_x",
    "gaze_target_y",
    "gaze_target_z",
    "gaze_screen_x",
    "gaze_screen_y",
    "scene_id",
)

FLOAT_COLUMNS: Final[frozenset[str]] = frozenset({
    "timestamp",
    "pos_x", "pos_y", "pos_z",
    "rot_x", "rot_y", "rot_z",
    "gaze_target_x", "gaze_target_y", "gaze_target_z",
    "gaze_screen_x", "gaze_screen_y",
})

# Nullable: only present while a gaze estimator (or placeholder) provides a point
OPTIONAL_COLUMNS: Final[frozenset[str]] = frozenset({"gaze_screen_x", "gaze_screen_y"})

STRING_COLUMNS: Final[frozenset[str]] = frozenset({"participant_id", "interaction_mode", "gaze_target_name", "scene_id"})


def utf8_safe(text: str) -> str:
    """Replaces lone surrogates with their backslash escape so the text encodes as UTF-8."""
    return text.encode("utf-8", errors="backslashreplace").decode("utf-8")


def sample_to_row(sample: EventSample) -> dict[str, Any]:
    screen_x, screen_y = sample.gaze_screen_point if sample.gaze_screen_point else (None, None)
    return {
        "participant_id": sample.participant_id,
        "timestamp": sample.timestamp,
        "pos_x": sample.position.x,
        "pos_y": sample.position.y,
        "pos_z": sample.position.z,
        "rot_x": sample.orientation_euler.x,
        "rot_y": sample.orientation_euler.y,
        "rot_z": sample.orientation_euler.z,
        "interaction_mode": sample.interaction_mode.value,
        "map_open": sample.map_open,
        "gaze_target_name": sample.gaze_target_name,
        "gaze_target_x": sample.gaze_target_point.x,
        "gaze_target_y": sample.gaze_target_point.y,
        "gaze_target_z": sample.gaze_target_point.z,
        "gaze_screen_x": screen_x,
        "gaze_screen_y": screen_y,
        "scene_id": sample.scene_id,
    }


def row_to_sample(row: Mapping[str, Any]) -> EventSample:
    """Inverse of sample_to_row. Values must already be typed."""
    screen_point: Optional[tuple[float, float]] = None
    if row["gaze_screen_x"] is not None and row["gaze_screen_y"] is not None:
        screen_point = (row["gaze_screen_x"], row["gaze_screen_y"])

    return EventSample(
        participant_id=row["participant_id"],
        timestamp=row["timestamp"],
        position=Vector3(row["pos_x"], row["pos_y"], row["pos_z"]),
        orientation_euler=Vector3(row["rot_x"], row["rot_y"], row["rot_z"]),
        interaction_mode=InteractionMode(row["interaction_mode"]),
        map_open=row["map_open"],
        gaze_target_name=row["gaze_target_name"],
        gaze_target_point=Vector3(row["gaze_target_x"], row["gaze_target_y"], row["gaze_target_z"]),
        gaze_screen_point=screen_point,
        scene_id=row["scene_id"],
    )
