import csv
import io
from typing import Any, Optional

from ..models import SessionLog
from .base import SessionEncoder
from .schema import FLAT_COLUMNS, FLOAT_COLUMNS, OPTIONAL_COLUMNS, row_to_sample, sample_to_row


class TabularEncoder(SessionEncoder):
    """
    Flat tabular encoding: a header row and one CSV row per sample.

    Quoting follows the usual CSV rule (fields containing the separator, a
    quote or a line break are quoted, inner quotes doubled). Floats are
    written in their shortest round-trip form with a '.' decimal point,
    independent of the host locale. The session's paused duration has no
    column; SessionWriter stores it in a summary sidecar next to the file.
    """
    extension = "csv"
    stores_session_fields = False

    def encode(self, log: SessionLog) -> bytes:
        buffer = io.StringIO(newline="")
        writer = csv.writer(buffer, lineterminator="\r\n", quoting=csv.QUOTE_MINIMAL)
        writer.writerow(FLAT_COLUMNS)

        for sample in log.samples:
            row = sample_to_row(sample)
            writer.writerow([self._format(column, row[column]) for column in FLAT_COLUMNS])

        # Lone surrogates (names decoded with surrogateescape) become \udcXX text
        return buffer.getvalue().encode("utf-8", errors="backslashreplace")

    def decode(self, data: bytes, participant_id: Optional[str] = None) -> SessionLog:
        reader = csv.reader(io.StringIO(data.decode("utf-8"), newline=""))

        header = next(reader, None)
        if header is None or tuple(header) != FLAT_COLUMNS:
            raise ValueError(f"Unexpected CSV header: {header!r}")

        samples = []
        for line_no, fields in enumerate(reader, start=2):
            if not fields:
                continue
            if len(fields) != len(FLAT_COLUMNS):
                raise ValueError(f"Line {line_no}: expected {len(FLAT_COLUMNS)} fields, got {len(fields)}.")
            row = {column: self._parse(column, value) for column, value in zip(FLAT_COLUMNS, fields)}
            samples.append(row_to_sample(row))

        if samples:
            participant_id = samples[0].participant_id
        elif participant_id is None:
            raise ValueError("Cannot recover the participant id from an empty CSV session.")

        return SessionLog(participant_id, samples)

    @staticmethod
    def _format(column: str, value: Any) -> str:
        if value is None:
            return ""
        if column in FLOAT_COLUMNS:
            return repr(float(value))
        return str(value)

    @staticmethod
    def _parse(column: str, value: str) -> Any:
        if column in FLOAT_COLUMNS:
            if value == "" and column in OPTIONAL_COLUMNS:
                return None
            return float(value)
        if column == "map_open":
            return value == "True"
        return value
