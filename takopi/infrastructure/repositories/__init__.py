"""Implementaciones de repositorios: file store (local) y PostgreSQL (remote)."""

from .file import (
    FileCollectionRepository,
    FileFollowRepository,
    FileLikeRepository,
    FilePinRepository,
)
from .postgres import (
    PostgresCollectionRepository,
    PostgresFollowRepository,
    PostgresLikeRepository,
    PostgresPinRepository,
)

__all__ = [
    "FileFollowRepository",
    "FileLikeRepository",
    "FilePinRepository",
    "FileCollectionRepository",
    "PostgresFollowRepository",
    "PostgresLikeRepository",
    "PostgresPinRepository",
    "PostgresCollectionRepository",
]
