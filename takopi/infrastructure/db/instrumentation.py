"""
===============================================================================
CRC CARD — infrastructure/db/instrumentation.py
===============================================================================

Clases:
  - TimedConnection (Proxy)
  - InstrumentedConnectionPool (Facade/Proxy)

Responsabilidades:
  - Medir duración de conn.execute(...) sin tocar repositorios.
  - Loguear slow queries (solo el tipo de statement, nunca parámetros).
  - Envolver fallas al adquirir conexión en DatabaseConnectionError.

Colaboradores:
  - crosscutting.logger
  - psycopg_pool.ConnectionPool (pool real)
===============================================================================
"""

from __future__ import annotations

import time
from typing import Any, ContextManager

from ...crosscutting.logger import logger
from .errors import DatabaseConnectionError


def _statement_kind(sql: Any) -> str:
    """Primer keyword del statement (SELECT/INSERT/...) para logs."""
    parts = str(sql).lstrip().split(None, 1)
    return parts[0].upper() if parts else "UNKNOWN"


class TimedConnection:
    """
    Proxy de conexión: intercepta execute para medir tiempo.

    Todo lo demás (transaction, commit, cursor...) se delega al conn real.
    """

    def __init__(self, inner_conn, *, slow_query_seconds: float) -> None:
        self._conn = inner_conn
        self._slow = slow_query_seconds

    def execute(self, sql, *args, **kwargs):
        start = time.perf_counter()
        try:
            return self._conn.execute(sql, *args, **kwargs)
        finally:
            elapsed = time.perf_counter() - start
            if elapsed >= self._slow:
                logger.warning(
                    "DB query lenta",
                    extra={"kind": _statement_kind(sql), "seconds": round(elapsed, 4)},
                )

    def __getattr__(self, item: str):
        return getattr(self._conn, item)


class _ConnectionContext(ContextManager[TimedConnection]):
    """Context manager que envuelve el de psycopg_pool."""

    def __init__(self, inner_ctx, *, slow_query_seconds: float) -> None:
        self._inner_ctx = inner_ctx
        self._slow = slow_query_seconds

    def __enter__(self) -> TimedConnection:
        try:
            conn = self._inner_ctx.__enter__()
        except Exception as exc:
            raise DatabaseConnectionError(
                "No se pudo adquirir conexión DB.", original_error=exc
            ) from exc
        return TimedConnection(conn, slow_query_seconds=self._slow)

    def __exit__(self, exc_type, exc, tb):
        return self._inner_ctx.__exit__(exc_type, exc, tb)


class InstrumentedConnectionPool:
    """
    Facade del pool real.

    Los repositorios siguen haciendo `with pool.connection() as conn:` pero
    reciben un TimedConnection.
    """

    def __init__(self, inner_pool, *, slow_query_seconds: float = 0.25) -> None:
        self._pool = inner_pool
        self._slow_seconds = slow_query_seconds

    def connection(self, *args, **kwargs) -> ContextManager[TimedConnection]:
        return _ConnectionContext(
            self._pool.connection(*args, **kwargs),
            slow_query_seconds=self._slow_seconds,
        )

    def __getattr__(self, item: str):
        return getattr(self._pool, item)
