"""Repositorios sobre el file store JSON (backend local)."""

from .base import FileRepository, parse_timestamp
from .collection import FileCollectionRepository
from .follow import FileFollowRepository
from .like import FileLikeRepository
from .pin import FilePinRepository

__all__ = [
    "FileRepository",
    "parse_timestamp",
    "FileFollowRepository",
    "FileLikeRepository",
    "FilePinRepository",
    "FileCollectionRepository",
]
