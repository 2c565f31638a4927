"""
===============================================================================
CRC CARD — infrastructure/db/pool.py
===============================================================================

Componente:
  Pool de conexiones PostgreSQL (singleton de proceso)

Responsabilidades:
  - Inicializar, exponer y cerrar el pool de conexiones.
  - Configurar conexiones (statement_timeout).
  - Devolver un pool instrumentado (slow queries) sin tocar repositorios.

Colaboradores:
  - psycopg_pool.ConnectionPool
  - infrastructure/db/instrumentation.InstrumentedConnectionPool
  - crosscutting.config (timeouts)

Principios:
  - Fail-fast (doble init, uso sin init)
  - Solo se usa en modo remoto; en modo local nadie llama init_pool()
===============================================================================
"""

from __future__ import annotations

import threading
from typing import Optional

from psycopg_pool import ConnectionPool

from ...crosscutting.logger import logger
from .errors import PoolAlreadyInitializedError, PoolNotInitializedError
from .instrumentation import InstrumentedConnectionPool

_pool: Optional[InstrumentedConnectionPool] = None
_pool_lock = threading.Lock()


def _configure_connection(conn) -> None:
    """Guardrail contra queries colgadas: statement_timeout por conexión."""
    from ...crosscutting.config import get_settings

    timeout_ms = int(get_settings().db_statement_timeout_ms)
    if timeout_ms > 0:
        conn.execute(f"SET statement_timeout = {timeout_ms}")
        conn.commit()


def init_pool(
    database_url: str,
    min_size: int,
    max_size: int,
    *,
    slow_query_seconds: float = 0.25,
) -> InstrumentedConnectionPool:
    """Inicializa el pool (una vez por proceso)."""
    global _pool

    with _pool_lock:
        if _pool is not None:
            raise PoolAlreadyInitializedError("El pool ya fue inicializado.")

        logger.info(
            "Inicializando pool DB",
            extra={"min_size": min_size, "max_size": max_size},
        )

        real_pool = ConnectionPool(
            conninfo=database_url,
            min_size=min_size,
            max_size=max_size,
            configure=_configure_connection,
            open=True,
        )
        _pool = InstrumentedConnectionPool(
            real_pool, slow_query_seconds=slow_query_seconds
        )

        logger.info("Pool DB inicializado")
        return _pool


def get_pool() -> InstrumentedConnectionPool:
    """Retorna el pool instrumentado singleton."""
    if _pool is None:
        raise PoolNotInitializedError(
            "Pool no inicializado. Llamar init_pool() primero."
        )
    return _pool


def is_pool_initialized() -> bool:
    return _pool is not None


def close_pool() -> None:
    """Cierra el pool (idempotente)."""
    global _pool

    with _pool_lock:
        if _pool is not None:
            logger.info("Cerrando pool DB")
            try:
                _pool.close()
            finally:
                _pool = None


def reset_pool() -> None:
    """Reset para tests: descarta el singleton aunque close() falle."""
    global _pool

    with _pool_lock:
        pool, _pool = _pool, None
    if pool is not None:
        try:
            pool.close()
        except Exception:
            logger.warning("reset_pool: close() falló", exc_info=True)
