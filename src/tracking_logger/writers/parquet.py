import logging
from typing import Final, Optional

import pyarrow as pa
import pyarrow.parquet as pq

from ..models import SessionLog
from .base import SessionEncoder
from .schema import FLAT_COLUMNS, STRING_COLUMNS, row_to_sample, sample_to_row, utf8_safe

logger = logging.getLogger(__name__)

_PARTICIPANT_KEY: Final[bytes] = b"participant_id"
_PAUSED_KEY: Final[bytes] = b"paused_duration"


class ParquetEncoder(SessionEncoder):
    """
    Columnar rendition of the flat tabular layout.

    Columns and their order match the CSV encoding. The session-level fields
    live in the schema metadata, so the whole SessionLog survives a round trip.
    """
    extension = "parquet"

    _SCHEMA: Final[pa.Schema] = pa.schema([
        # Identity and time
        ("participant_id", pa.string()),
        ("timestamp", pa.float64()),

        # Pose
        ("pos_x", pa.float64()),
        ("pos_y", pa.float64()),
        ("pos_z", pa.float64()),
        ("rot_x", pa.float64()),
        ("rot_y", pa.float64()),
        ("rot_z", pa.float64()),

        # Controller
        ("interaction_mode", pa.string()),
        ("map_open", pa.bool_()),

        # Gaze
        ("gaze_target_name", pa.string()),
        ("gaze_target_x", pa.float64()),
        ("gaze_target_y", pa.float64()),
        ("gaze_target_z", pa.float64()),
        ("gaze_screen_x", pa.float64()),
        ("gaze_screen_y", pa.float64()),

        # Context
        ("scene_id", pa.string()),
    ])

    def __init__(self, compression: str = "zstd"):
        self.compression = compression

    def encode(self, log: SessionLog) -> bytes:
        rows = [sample_to_row(s) for s in log.samples]
        for row in rows:
            for column in STRING_COLUMNS:
                row[column] = utf8_safe(row[column])
        schema = self._SCHEMA.with_metadata({
            _PARTICIPANT_KEY: utf8_safe(log.participant_id).encode("utf-8"),
            _PAUSED_KEY: repr(log.paused_duration).encode("ascii"),
        })

        table = pa.Table.from_arrays(
            [pa.array([r[c] for r in rows], type=schema.field(c).type) for c in FLAT_COLUMNS],
            schema=schema,
        )

        sink = pa.BufferOutputStream()
        pq.write_table(table, sink, compression=self.compression)
        return sink.getvalue().to_pybytes()

    def decode(self, data: bytes, participant_id: Optional[str] = None) -> SessionLog:
        table = pq.read_table(pa.BufferReader(data))
        metadata = table.schema.metadata or {}

        if _PARTICIPANT_KEY in metadata:
            participant_id = metadata[_PARTICIPANT_KEY].decode("utf-8")
        elif participant_id is None:
            raise ValueError("Parquet session carries no participant id.")

        paused_duration = float(metadata.get(_PAUSED_KEY, b"0.0"))
        samples = [row_to_sample(row) for row in table.select(list(FLAT_COLUMNS)).to_pylist()]

        logger.debug("Decoded %d samples from parquet", len(samples))
        return SessionLog(participant_id, samples, paused_duration)
