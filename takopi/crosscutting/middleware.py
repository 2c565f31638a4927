# takopi/crosscutting/middleware.py
"""
===============================================================================
MÓDULO: Middleware HTTP de contexto
===============================================================================

RequestContextMiddleware:
  - Generar/propagar X-Request-Id
  - Setear contextvars (method/path) para correlación de logs
  - Loguear cada request con status y latencia
  - Garantizar clear_context() al terminar

Colaboradores:
  - takopi/context.py
  - crosscutting/logger.py
===============================================================================
"""

from __future__ import annotations

import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ..context import clear_context, set_request_context
from .logger import logger

_MAX_REQUEST_ID_LEN = 128


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Request ID + contexto de logging por request."""

    _QUIET_PATHS = {"/healthz"}

    @staticmethod
    def _is_valid_request_id(value: str) -> bool:
        if not value or len(value) > _MAX_REQUEST_ID_LEN:
            return False
        return all(ch.isalnum() or ch in "-_." for ch in value)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        incoming = (request.headers.get("x-request-id") or "").strip()
        request_id = (
            incoming if self._is_valid_request_id(incoming) else str(uuid.uuid4())
        )

        set_request_context(
            request_id=request_id, method=request.method, path=request.url.path
        )
        request.state.request_id = request_id

        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "request falló",
                extra={
                    "status_code": 500,
                    "latency_ms": round((time.perf_counter() - start) * 1000, 2),
                },
            )
            clear_context()
            raise

        response.headers["X-Request-Id"] = request_id
        if request.url.path not in self._QUIET_PATHS:
            logger.info(
                "request completado",
                extra={
                    "status_code": response.status_code,
                    "latency_ms": round((time.perf_counter() - start) * 1000, 2),
                },
            )
        clear_context()
        return response
