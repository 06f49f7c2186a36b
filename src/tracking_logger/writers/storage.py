import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


class FileStorage:
    """
    Whole-file storage on the local filesystem.

    Writes go to a temporary file in the target directory which then replaces
    the target, so a crash mid-write never leaves a truncated session file.
    """

    def exists(self, path: Path) -> bool:
        return path.exists()

    def read_bytes(self, path: Path) -> bytes:
        return path.read_bytes()

    def list_names(self, directory: Path) -> list[str]:
        """File names directly inside directory; empty if it does not exist."""
        if not directory.is_dir():
            return []
        return [entry.name for entry in directory.iterdir() if entry.is_file()]

    def write_bytes(self, path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as tmp_file:
                tmp_file.write(data)
                tmp_file.flush()
                os.fsync(tmp_file.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            # Leave the previous checkpoint untouched and drop the partial file
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.debug("Wrote %d bytes to %s", len(data), path)
