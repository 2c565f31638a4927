# takopi/crosscutting/error_responses.py
"""
===============================================================================
MÓDULO: Respuestas de error estándar (RFC 7807 / Problem Details)
===============================================================================

Objetivo
--------
Uniformar todos los errores HTTP para que el frontend maneje por "code" y el
backend correlacione por request_id / error_id.

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  AppHTTPException + app_exception_handler

Responsabilidades:
  - Definir catálogo de códigos de error (ErrorCode)
  - Construir payload RFC 7807 (ErrorDetail)
  - Proveer la factory de 401 (unauthorized)

Colaboradores:
  - crosscutting/middleware.py (request_id)
  - api/exception_handlers.py (mapea TakopiError -> AppHTTPException)
  - identity/auth.py (unauthorized)
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ErrorCode(str, Enum):
    # 4xx
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"

    # 5xx
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorDetail(BaseModel):
    """
    Modelo RFC 7807 (Problem Details).

    Campos extra:
    - code: error code estable para clientes
    - errors: detalles opcionales (error_id, request_id, field errors)
    """

    type: str = "about:blank"
    title: str
    status: int
    detail: str
    code: ErrorCode
    instance: str | None = None
    errors: list[dict[str, Any]] | None = None


PROBLEM_JSON_MEDIA_TYPE = "application/problem+json"

_OPENAPI_ERROR_CONTENT = {
    PROBLEM_JSON_MEDIA_TYPE: {"schema": {"$ref": "#/components/schemas/ErrorDetail"}}
}


def _problem(description: str) -> dict[str, Any]:
    return {
        "description": f"{description} (RFC7807)",
        "model": ErrorDetail,
        "content": _OPENAPI_ERROR_CONTENT,
    }


OPENAPI_ERROR_RESPONSES = {
    "401": _problem("Unauthorized"),
    "403": _problem("Forbidden"),
    "404": _problem("Not Found"),
    "409": _problem("Conflict"),
    "422": _problem("Validation Error"),
    "default": _problem("Error"),
}


class AppHTTPException(HTTPException):
    """HTTPException con ErrorCode estable y errores adicionales opcionales."""

    def __init__(
        self,
        status_code: int,
        code: ErrorCode,
        detail: str,
        errors: list[dict[str, Any]] | None = None,
    ):
        super().__init__(status_code=status_code, detail=detail)
        self.code = code
        self.errors = errors


# ---------------------------------------------------------------------------
# Factory de error (401)
# ---------------------------------------------------------------------------
def unauthorized(detail: str = "No autorizado") -> AppHTTPException:
    exc = AppHTTPException(401, ErrorCode.UNAUTHORIZED, detail)
    exc.headers = {"WWW-Authenticate": "Bearer"}
    return exc


# ---------------------------------------------------------------------------
# Handler FastAPI
# ---------------------------------------------------------------------------
async def app_exception_handler(
    request: Request, exc: AppHTTPException
) -> JSONResponse:
    """
    Handler para AppHTTPException.

    Incluye instance (URL), request_id y propaga headers (WWW-Authenticate).
    """
    request_id = getattr(getattr(request, "state", None), "request_id", None)

    errors = list(exc.errors or [])
    if request_id and not any("request_id" in e for e in errors):
        errors.append({"request_id": request_id})

    error = ErrorDetail(
        type=f"about:blank/{exc.code.value.lower()}",
        title=exc.code.value.replace("_", " ").title(),
        status=exc.status_code,
        detail=str(exc.detail),
        code=exc.code,
        instance=str(request.url),
        errors=errors or None,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=error.model_dump(exclude_none=True, mode="json"),
        headers=getattr(exc, "headers", None),
        media_type=PROBLEM_JSON_MEDIA_TYPE,
    )
