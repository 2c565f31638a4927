# takopi/crosscutting/logger.py
"""
===============================================================================
MÓDULO: Logger estructurado (JSON) con contexto de request
===============================================================================

Objetivo
--------
Que cada línea de log sea un objeto JSON parseable y correlacionable por
request_id, sin filtrar tokens ni secretos.

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  JSONFormatter + setup_logger()

Responsabilidades:
  - Serializar LogRecord -> JSON (una línea por evento)
  - Adjuntar contexto de request (request_id, method, path)
  - Redactar claves sensibles y recortar valores gigantes

Colaboradores:
  - takopi/context.py (ContextVars)
  - crosscutting/config.py (log_level / log_json)
===============================================================================
"""

from __future__ import annotations

import json
import logging
import os
import sys
import traceback
from datetime import datetime, timezone
from typing import Any

# Atributos estándar de LogRecord: no se copian como "extra".
_RESERVED_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None)).keys()
) | {"message", "asctime", "taskName"}


class _Redactor:
    """
    Sanitiza valores de `extra` antes de serializarlos.

    Reglas:
      - claves sensibles -> "***REDACTADO***"
      - strings largos -> recortados
      - estructuras profundas -> "***TRUNCADO***"
    """

    SENSITIVE_KEYS = {
        "password",
        "secret",
        "token",
        "authorization",
        "access_token",
        "jwt",
        "jwt_secret",
        "database_url",
    }

    def __init__(self, max_str: int = 4_000, max_depth: int = 4):
        self._max_str = max_str
        self._max_depth = max_depth

    def sanitize(self, value: Any, *, depth: int = 0, key: str | None = None) -> Any:
        if key and key.lower() in self.SENSITIVE_KEYS:
            return "***REDACTADO***"
        if depth > self._max_depth:
            return "***TRUNCADO***"
        if isinstance(value, str):
            if len(value) <= self._max_str:
                return value
            return value[: self._max_str] + "…(truncado)"
        if isinstance(value, dict):
            return {
                str(k): self.sanitize(v, depth=depth + 1, key=str(k))
                for k, v in value.items()
            }
        if isinstance(value, (list, tuple, set)):
            return [self.sanitize(v, depth=depth + 1, key=key) for v in value]
        return value


class JSONFormatter(logging.Formatter):
    """LogRecord -> JSON con contexto de request y stacktrace si hay excepción."""

    def __init__(self):
        super().__init__()
        self._redactor = _Redactor()

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "pid": os.getpid(),
        }

        # Import tardío: context.py no depende del logger, pero evitamos ciclos.
        from ..context import get_context_dict

        payload.update(get_context_dict())

        for k, v in record.__dict__.items():
            if k in _RESERVED_ATTRS:
                continue
            payload[k] = self._redactor.sanitize(v, key=k)

        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            payload["exception"] = {
                "type": exc_type.__name__ if exc_type else None,
                "message": str(exc_value) if exc_value else None,
                "stacktrace": traceback.format_exception(*record.exc_info),
            }

        return json.dumps(
            payload, ensure_ascii=False, default=str, separators=(",", ":")
        )


def setup_logger(name: str = "takopi") -> logging.Logger:
    """
    Crea y configura el logger del servicio.

    - No duplica handlers si el módulo se reimporta.
    - Toma log_level / log_json de Settings; si Settings es inválido
      (ej: falta DATABASE_URL en import-time) usa INFO + JSON.
    """
    log = logging.getLogger(name)

    level = "INFO"
    use_json = True
    try:
        from .config import get_settings

        settings = get_settings()
        level = (settings.log_level or "INFO").upper()
        use_json = settings.log_json
    except ValueError:
        # pydantic.ValidationError es subclase de ValueError.
        pass

    log.setLevel(getattr(logging, level, logging.INFO))

    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            JSONFormatter()
            if use_json
            else logging.Formatter("%(levelname)s %(name)s %(message)s")
        )
        log.addHandler(handler)

    return log


# Instancia global (import-friendly)
logger = setup_logger()
