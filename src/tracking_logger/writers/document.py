import json
import math
from typing import Any, Optional

from ..models import EventSample, InteractionMode, SessionLog, Vector3
from .base import SessionEncoder


def _number(value: float) -> Optional[float]:
    # Strict JSON has no NaN or Infinity
    return value if math.isfinite(value) else None


def _float(value: Any) -> float:
    return math.nan if value is None else float(value)


def _vector_to_dict(vector: Vector3) -> dict[str, Optional[float]]:
    return {"x": _number(vector.x), "y": _number(vector.y), "z": _number(vector.z)}


def _vector_from_dict(data: dict[str, Any]) -> Vector3:
    return Vector3(_float(data["x"]), _float(data["y"]), _float(data["z"]))


class DocumentEncoder(SessionEncoder):
    """
    Structured-document encoding: the whole session as one JSON object.

    Layout:
        {
          "participant_id": "...",
          "paused_duration": 12.5,
          "events": [{...one object per sample...}]
        }
    """
    extension = "json"

    def __init__(self, indent: Optional[int] = 2):
        self.indent = indent

    def encode(self, log: SessionLog) -> bytes:
        document = {
            "participant_id": log.participant_id,
            "paused_duration": _number(log.paused_duration),
            "events": [self._sample_to_dict(s) for s in log.samples],
        }
        text = json.dumps(document, indent=self.indent or None, ensure_ascii=False, allow_nan=False)
        # A lone surrogate becomes its \uXXXX escape, which is valid inside a JSON string
        return (text + "\n").encode("utf-8", errors="backslashreplace")

    def decode(self, data: bytes, participant_id: Optional[str] = None) -> SessionLog:
        document = json.loads(data.decode("utf-8"))
        return SessionLog(
            participant_id=document.get("participant_id", participant_id),
            samples=[self._sample_from_dict(e) for e in document.get("events", [])],
            paused_duration=float(document.get("paused_duration") or 0.0),
        )

    @staticmethod
    def _sample_to_dict(sample: EventSample) -> dict[str, Any]:
        screen_point = None
        if sample.gaze_screen_point is not None:
            screen_point = {"x": _number(sample.gaze_screen_point[0]), "y": _number(sample.gaze_screen_point[1])}

        return {
            "participant_id": sample.participant_id,
            "timestamp": _number(sample.timestamp),
            "position": _vector_to_dict(sample.position),
            "orientation_euler": _vector_to_dict(sample.orientation_euler),
            "interaction_mode": sample.interaction_mode.value,
            "map_open": sample.map_open,
            "gaze_target_name": sample.gaze_target_name,
            "gaze_target_point": _vector_to_dict(sample.gaze_target_point),
            "gaze_screen_point": screen_point,
            "scene_id": sample.scene_id,
        }

    @staticmethod
    def _sample_from_dict(data: dict[str, Any]) -> EventSample:
        screen = data.get("gaze_screen_point")
        return EventSample(
            participant_id=data["participant_id"],
            timestamp=_float(data["timestamp"]),
            position=_vector_from_dict(data["position"]),
            orientation_euler=_vector_from_dict(data["orientation_euler"]),
            interaction_mode=InteractionMode(data["interaction_mode"]),
            map_open=bool(data["map_open"]),
            gaze_target_name=data["gaze_target_name"],
            gaze_target_point=_vector_from_dict(data["gaze_target_point"]),
            gaze_screen_point=(_float(screen["x"]), _float(screen["y"])) if screen else None,
            scene_id=data["scene_id"],
        )
