"""Infra DB: pool + errores tipados + instrumentación."""

from .errors import (
    DatabaseConnectionError,
    DatabasePoolError,
    PoolAlreadyInitializedError,
    PoolNotInitializedError,
)
from .pool import close_pool, get_pool, init_pool, is_pool_initialized, reset_pool

__all__ = [
    "DatabasePoolError",
    "DatabaseConnectionError",
    "PoolAlreadyInitializedError",
    "PoolNotInitializedError",
    "init_pool",
    "get_pool",
    "close_pool",
    "reset_pool",
    "is_pool_initialized",
]
