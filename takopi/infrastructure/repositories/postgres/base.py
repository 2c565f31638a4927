"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/base.py
============================================================
Class: PostgresRepository (base de repositorios SQL crudo)

Responsibilities:
- Resolver el pool (inyectado en tests, global en runtime).
- Ejecutar queries parametrizadas dentro de `with pool.connection()`
  (una transacción por bloque; commit al salir, rollback si hay excepción).
- Traducir errores de forma consistente:
    UniqueViolation -> ConflictError (clave natural duplicada)
    cualquier otra   -> DatabaseError (logueado con stacktrace)

Collaborators:
- psycopg.errors (UniqueViolation)
- psycopg_pool.ConnectionPool (vía infrastructure/db/pool)
- crosscutting.exceptions, crosscutting.logger

Constraints / Notes:
- Sin lógica de negocio: los repos solo filtran y devuelven.
- Queries siempre parametrizadas (nada de interpolación de input de usuario).
============================================================
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Optional, TypeVar
from uuid import uuid4

from psycopg import errors as pg_errors

from ....crosscutting.exceptions import ConflictError, DatabaseError, TakopiError
from ....crosscutting.logger import logger

T = TypeVar("T")


def new_id() -> str:
    """R: Ids de filas como texto (mismo tipo que en el file store)."""
    return str(uuid4())


class PostgresRepository:
    """R: Helpers de ejecución compartidos por los repositorios Postgres."""

    def __init__(self, pool: Optional[Any] = None):
        # R: Pool inyectable para tests; en producción se obtiene por factory global.
        self._pool = pool

    def _get_pool(self):
        # R: Lazy-load para no acoplarse al singleton en import-time.
        if self._pool is not None:
            return self._pool

        from ...db.pool import get_pool

        return get_pool()

    # =========================================================
    # Ejecución (DRY + errores consistentes)
    # =========================================================
    def _run(
        self,
        fn: Callable[[Any], T],
        *,
        context_msg: str,
        extra: dict,
        conflict_msg: str | None = None,
    ) -> T:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                return fn(conn)
        except TakopiError:
            raise
        except pg_errors.UniqueViolation as exc:
            logger.info(
                f"{context_msg} (duplicado)",
                extra={**extra, "constraint": getattr(exc.diag, "constraint_name", None)},
            )
            raise ConflictError(
                conflict_msg or f"{context_msg}: registro duplicado",
                original_error=exc,
            ) from exc
        except Exception as exc:
            logger.exception(context_msg, extra={**extra, "error": str(exc)})
            raise DatabaseError(f"{context_msg}: {exc}", original_error=exc) from exc

    def _fetchall(
        self,
        *,
        query: str,
        params: Iterable[object],
        context_msg: str,
        extra: dict,
    ) -> list[tuple]:
        return self._run(
            lambda conn: conn.execute(query, tuple(params)).fetchall(),
            context_msg=context_msg,
            extra=extra,
        )

    def _fetchone(
        self,
        *,
        query: str,
        params: Iterable[object],
        context_msg: str,
        extra: dict,
        conflict_msg: str | None = None,
    ) -> tuple | None:
        return self._run(
            lambda conn: conn.execute(query, tuple(params)).fetchone(),
            context_msg=context_msg,
            extra=extra,
            conflict_msg=conflict_msg,
        )

    def _execute(
        self,
        *,
        query: str,
        params: Iterable[object],
        context_msg: str,
        extra: dict,
    ) -> int:
        """R: Ejecuta un statement sin resultset; devuelve rowcount."""
        return self._run(
            lambda conn: conn.execute(query, tuple(params)).rowcount,
            context_msg=context_msg,
            extra=extra,
        )

    def _count(
        self,
        *,
        query: str,
        params: Iterable[object],
        context_msg: str,
        extra: dict,
    ) -> int:
        row = self._fetchone(
            query=query, params=params, context_msg=context_msg, extra=extra
        )
        return int(row[0]) if row else 0
