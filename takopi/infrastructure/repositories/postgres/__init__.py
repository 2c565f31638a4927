"""Repositorios PostgreSQL (SQL crudo sobre psycopg_pool)."""

from .base import PostgresRepository
from .collection import PostgresCollectionRepository
from .follow import PostgresFollowRepository
from .like import PostgresLikeRepository
from .pin import PostgresPinRepository

__all__ = [
    "PostgresRepository",
    "PostgresFollowRepository",
    "PostgresLikeRepository",
    "PostgresPinRepository",
    "PostgresCollectionRepository",
]
