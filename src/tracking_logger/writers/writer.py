import json
import logging
from pathlib import Path
from typing import Optional

from ..models import SessionLog
from .base import SessionEncoder
from .storage import FileStorage

logger = logging.getLogger(__name__)

SUMMARY_SUFFIX = ".summary.json"


def summary_path(path: Path) -> Path:
    """Sidecar holding the session-level fields of encodings without room for them."""
    return path.with_name(path.name + SUMMARY_SUFFIX)


class SessionWriter:
    """
    Persists a SessionLog through an encoder onto storage.

    Write failures are logged and reported through the return value; they
    never propagate, so an active session keeps its in-memory log and the
    next checkpoint or final write simply tries again.
    """

    def __init__(self, encoder: SessionEncoder, storage: Optional[FileStorage] = None):
        self.encoder = encoder
        self.storage = storage or FileStorage()
        self._failures = 0

    @property
    def extension(self) -> str:
        return self.encoder.extension

    @property
    def consecutive_failures(self) -> int:
        return self._failures

    def write(self, log: SessionLog, path: Path) -> bool:
        try:
            payload = self.encoder.encode(log)
            self.storage.write_bytes(path, payload)
            if not self.encoder.stores_session_fields:
                self.storage.write_bytes(summary_path(path), self._encode_summary(log))
        except (OSError, ValueError, TypeError):
            # ValueError covers UnicodeEncodeError and pyarrow.ArrowInvalid
            self._failures += 1
            logger.exception(
                f"Failed to write session of {log.participant_id} to {path} "
                f"({self._failures} consecutive failures)."
            )
            return False

        if self._failures:
            logger.info(f"Session file {path} written again after {self._failures} failed attempts.")
        self._failures = 0
        return True

    def read(self, path: Path, participant_id: Optional[str] = None) -> SessionLog:
        summary = None
        sidecar = summary_path(path)
        if not self.encoder.stores_session_fields and self.storage.exists(sidecar):
            summary = json.loads(self.storage.read_bytes(sidecar).decode("utf-8"))
            participant_id = participant_id or summary.get("participant_id")

        log = self.encoder.decode(self.storage.read_bytes(path), participant_id)
        if summary is None:
            return log
        return SessionLog(log.participant_id, log.samples, float(summary.get("paused_duration", 0.0)))

    @staticmethod
    def _encode_summary(log: SessionLog) -> bytes:
        summary = {
            "participant_id": log.participant_id,
            "paused_duration": log.paused_duration,
            "samples": len(log),
        }
        return (json.dumps(summary, indent=2, ensure_ascii=True) + "\n").encode("ascii")
