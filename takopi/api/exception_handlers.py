"""
===============================================================================
TARJETA CRC — takopi/api/exception_handlers.py (Manejo Centralizado de Excepciones)
===============================================================================

Responsabilidades:
  - Traducir la taxonomía TakopiError a respuestas HTTP RFC7807:
        ValidationError  -> 422
        NotFoundError    -> 404
        ForbiddenError   -> 403
        ConflictError    -> 409
        OperationalError -> 500 (detalle genérico)
  - Traducir errores de validación de FastAPI a RFC7807 (422).
  - Centralizar logging de errores con request_id + error_id.
  - Evitar filtrar detalles internos en errores no controlados.

Patrones aplicados:
  - Exception Mapping (Presentation Layer).
  - Fail-safe: cualquier excepción no tipada -> INTERNAL_ERROR (con logging).

Colaboradores:
  - crosscutting.error_responses: AppHTTPException, ErrorCode, app_exception_handler
  - crosscutting.exceptions: TakopiError y derivadas
===============================================================================
"""

from __future__ import annotations

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
)
from ..crosscutting.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    OperationalError,
    TakopiError,
    ValidationError,
)
from ..crosscutting.logger import logger

_GENERIC_DETAIL = "Error interno."


def _request_id_from(request: Request) -> str | None:
    return getattr(getattr(request, "state", None), "request_id", None)


async def _handle_domain_error(
    request: Request,
    *,
    exc: TakopiError,
    code: ErrorCode,
    status_code: int,
) -> JSONResponse:
    """Helper común para errores de negocio (4xx): el mensaje es seguro para el cliente."""
    request_id = _request_id_from(request)

    logger.info(
        "Error de negocio",
        extra={
            "code": code.value,
            "error_code": exc.error_code,
            "error_id": exc.error_id,
            "request_id": request_id,
        },
    )

    app_exc = AppHTTPException(
        status_code=status_code,
        code=code,
        detail=exc.message,
        errors=[{"error_id": exc.error_id, "request_id": request_id}],
    )
    return await app_exception_handler(request, app_exc)


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return await _handle_domain_error(
        request, exc=exc, code=ErrorCode.VALIDATION_ERROR, status_code=422
    )


async def not_found_error_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return await _handle_domain_error(
        request, exc=exc, code=ErrorCode.NOT_FOUND, status_code=404
    )


async def forbidden_error_handler(request: Request, exc: ForbiddenError) -> JSONResponse:
    return await _handle_domain_error(
        request, exc=exc, code=ErrorCode.FORBIDDEN, status_code=403
    )


async def conflict_error_handler(request: Request, exc: ConflictError) -> JSONResponse:
    return await _handle_domain_error(
        request, exc=exc, code=ErrorCode.CONFLICT, status_code=409
    )


async def operational_error_handler(request: Request, exc: TakopiError) -> JSONResponse:
    """
    Falla de storage (o TakopiError sin mapeo propio).

    - Log con stacktrace y error_id.
    - Respuesta 500 genérica: nunca expone paths, SQL ni mensajes del driver.
    """
    request_id = _request_id_from(request)

    logger.error(
        "Error operacional",
        exc_info=exc,
        extra={
            "error_code": exc.error_code,
            "error_id": exc.error_id,
            "request_id": request_id,
        },
    )

    app_exc = AppHTTPException(
        status_code=500,
        code=ErrorCode.INTERNAL_ERROR,
        detail=_GENERIC_DETAIL,
        errors=[{"error_id": exc.error_id, "request_id": request_id}],
    )
    return await app_exception_handler(request, app_exc)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Body/query inválidos según los schemas Pydantic."""
    errors = [
        {
            "loc": [str(part) for part in err.get("loc", ())],
            "msg": err.get("msg", ""),
            "type": err.get("type", ""),
        }
        for err in exc.errors()
    ]
    app_exc = AppHTTPException(
        status_code=422,
        code=ErrorCode.VALIDATION_ERROR,
        detail="Request inválido.",
        errors=errors,
    )
    return await app_exception_handler(request, app_exc)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handler defensivo para excepciones no tipadas.

    - Log completo (stacktrace).
    - Respuesta genérica (evita filtrar internos).
    """
    request_id = _request_id_from(request)

    logger.error(
        "Excepción no controlada",
        exc_info=True,
        extra={"request_id": request_id, "error": str(exc)},
    )

    # R: El mensaje crudo queda sólo en el log, nunca en la respuesta.
    app_exc = AppHTTPException(
        status_code=500,
        code=ErrorCode.INTERNAL_ERROR,
        detail=_GENERIC_DETAIL,
        errors=[{"request_id": request_id}],
    )
    return await app_exception_handler(request, app_exc)


def register_exception_handlers(app) -> None:
    """
    Registra handlers en la app FastAPI.

    Importante:
      - Starlette resuelve por MRO: las subclases específicas ganan sobre
        TakopiError (fallback operacional).
      - Exception genérica se registra al final como fallback.
    """
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(NotFoundError, not_found_error_handler)
    app.add_exception_handler(ForbiddenError, forbidden_error_handler)
    app.add_exception_handler(ConflictError, conflict_error_handler)
    app.add_exception_handler(OperationalError, operational_error_handler)
    app.add_exception_handler(TakopiError, operational_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
