"""
===============================================================================
TARJETA CRC — takopi/context.py (Contexto por request)
===============================================================================

Responsabilidades:
  - Mantener contexto "request-scoped" usando ContextVars (async-safe).
  - Permitir correlación de logs sin pasar parámetros por todo el stack.

Colaboradores:
  - crosscutting.middleware: setea request_id/method/path al inicio del request.
  - crosscutting.logger: enriquece logs leyendo get_context_dict().

Restricciones:
  - Solo strings; "" significa "no disponible".
===============================================================================
"""

from __future__ import annotations

from contextvars import ContextVar

request_id_var: ContextVar[str] = ContextVar("request_id", default="")
user_id_var: ContextVar[str] = ContextVar("user_id", default="")
http_method_var: ContextVar[str] = ContextVar("http_method", default="")
http_path_var: ContextVar[str] = ContextVar("http_path", default="")

_VARS: tuple[tuple[str, ContextVar[str]], ...] = (
    ("request_id", request_id_var),
    ("user_id", user_id_var),
    ("method", http_method_var),
    ("path", http_path_var),
)


def set_request_context(
    *, request_id: str = "", method: str = "", path: str = ""
) -> None:
    """Setea el contexto mínimo del request."""
    request_id_var.set(request_id or "")
    http_method_var.set(method or "")
    http_path_var.set(path or "")


def set_user_context(user_id: str | None) -> None:
    """Registra el usuario autenticado (para correlación, nunca el token)."""
    user_id_var.set(user_id or "")


def get_context_dict() -> dict[str, str]:
    """Contexto actual como dict, omitiendo claves vacías."""
    return {key: value for key, var in _VARS if (value := var.get())}


def clear_context() -> None:
    """Limpia el contexto al final del request (evita filtraciones entre requests)."""
    for _, var in _VARS:
        var.set("")
