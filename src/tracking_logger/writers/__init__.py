from .base import SessionEncoder
from .document import DocumentEncoder
from .tabular import TabularEncoder
from .parquet import ParquetEncoder
from .storage import FileStorage
from .writer import SessionWriter
from .paths import SessionPaths

__all__ = [
    "DocumentEncoder",
    "FileStorage",
    "ParquetEncoder",
    "SessionEncoder",
    "SessionPaths",
    "SessionWriter",
    "TabularEncoder",
]
