"""Adapters de infraestructura: file store JSON (backend local)."""

from .errors import (
    DuplicateRecordError,
    StorageConfigurationError,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from .file_store import FilePage, JsonFileStore, PaginationMeta, generate_id
from .results import StorageResult

__all__ = [
    "JsonFileStore",
    "FilePage",
    "PaginationMeta",
    "StorageResult",
    "generate_id",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    "StorageConfigurationError",
    "DuplicateRecordError",
]
