# takopi/crosscutting/exceptions.py
"""
===============================================================================
MÓDULO: Excepciones tipadas (taxonomía de errores de Takopi)
===============================================================================

Objetivo
--------
Un único árbol de errores compartido por casos de uso, repositorios y la
capa HTTP, con:
- error_code estable (para clientes y logs)
- error_id para correlación
- message humana (sin secretos)

Taxonomía:
  TakopiError
  ├── ValidationError          (input inválido; nunca se aplica parcialmente)
  │   └── SelfFollowError      (follower_id == following_id)
  ├── NotFoundError            (entidad referenciada inexistente)
  ├── ForbiddenError           (el actor no es dueño)
  ├── ConflictError            (relación/membresía duplicada)
  └── OperationalError         (falla opaca del storage)
      └── DatabaseError        (PostgreSQL: conexión, query, timeout)

Los errores del file store (StorageError y derivados) viven en
infrastructure/storage/errors.py y heredan de OperationalError/ConflictError.

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  TakopiError + subclases

Responsabilidades:
  - Estandarizar errores que luego se mapean a HTTP (RFC 7807)
  - Generar error_id para rastreo

Colaboradores:
  - api/exception_handlers.py (mapea a AppHTTPException)
  - application/usecases/* (lanzan Validation/NotFound/Forbidden/Conflict)
  - infrastructure/repositories/* (lanzan Conflict/Database)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import uuid4


@dataclass(frozen=True)
class ErrorResponse:
    """Estructura mínima para responder errores de forma consistente."""

    error_code: str
    message: str
    error_id: str

    def to_dict(self) -> dict:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "error_id": self.error_id,
        }


class TakopiError(Exception):
    """Base de errores internos: error_code + error_id + message."""

    error_code: str = "TAKOPI_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            error_code=self.error_code, message=self.message, error_id=self.error_id
        )


class ValidationError(TakopiError):
    """Datos del caller violan una restricción de campo."""

    error_code: str = "VALIDATION_ERROR"


class SelfFollowError(ValidationError):
    """Un usuario intentó seguirse a sí mismo."""

    error_code: str = "SELF_FOLLOW"


class NotFoundError(TakopiError):
    """La entidad referenciada no existe."""

    error_code: str = "NOT_FOUND"


class ForbiddenError(TakopiError):
    """El actor no es dueño del recurso que intenta mutar/ver."""

    error_code: str = "FORBIDDEN"


class ConflictError(TakopiError):
    """Se intentó crear una relación/membresía que ya existe."""

    error_code: str = "CONFLICT"


class OperationalError(TakopiError):
    """Falla del storage subyacente, opaca para el caso de uso."""

    error_code: str = "OPERATIONAL_ERROR"


class DatabaseError(OperationalError):
    """Errores de DB (conexión, query, timeout, pool)."""

    error_code: str = "DATABASE_ERROR"
