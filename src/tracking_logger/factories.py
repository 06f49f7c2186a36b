from pathlib import Path
from typing import Optional

from .configs import AppSettings, Encoding
from .writers import (
    DocumentEncoder,
    FileStorage,
    ParquetEncoder,
    SessionEncoder,
    SessionPaths,
    SessionWriter,
    TabularEncoder,
)

def create_encoder(encoding: Encoding, indent: int = 2) -> SessionEncoder:
    """
    Creates the encoder for a persisted session encoding.
    """
    if encoding is Encoding.JSON:
        return DocumentEncoder(indent=indent)
    if encoding is Encoding.CSV:
        return TabularEncoder()
    if encoding is Encoding.PARQUET:
        return ParquetEncoder()
    raise ValueError(f"Unsupported encoding: {encoding!r}")


def create_session_writer(
    settings: AppSettings,
    storage: Optional[FileStorage] = None
) -> SessionWriter:
    encoder = create_encoder(settings.writer.encoding, settings.writer.indent)
    return SessionWriter(encoder, storage)


def create_session_paths(
    settings: AppSettings,
    storage: Optional[FileStorage] = None,
    base_dir: Optional[Path] = None
) -> SessionPaths:
    return SessionPaths(
        base_dir=base_dir or settings.data_dir,
        scenes=settings.scenes,
        prefix=settings.identity.file_prefix,
        storage=storage,
    )
