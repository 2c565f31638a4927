"""
===============================================================================
TARJETA CRC — identity/auth.py
===============================================================================

Módulo:
    Autenticación por JWT (Bearer)

Responsabilidades:
    - Emitir tokens de acceso firmados (HS256) para tooling y tests.
    - Decodificar y validar JWT (firma, exp) y resolver el user_id.
    - Exponer dependencias FastAPI:
        * require_user_id  -> 401 si falta / es inválido / expiró
        * optional_user_id -> None si falta o es inválido
    - Propagar el user_id al contexto de logging.

Colaboradores:
    - crosscutting.config.get_settings: jwt_secret.
    - crosscutting.error_responses.unauthorized: 401 RFC 7807.
    - takopi.context.set_user_context.

Decisiones de diseño:
    - El user_id sale del claim "sub"; "userId" se acepta como fallback
      para tokens emitidos por el frontend legacy.
    - No se loguean tokens ni secretos.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Header, Request

from ..context import set_user_context
from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import unauthorized
from ..crosscutting.logger import logger

# ---------------------------------------------------------------------------
# Constantes (evitan strings mágicos)
# ---------------------------------------------------------------------------

JWT_ALGORITHM: str = "HS256"

CLAIM_SUB: str = "sub"
CLAIM_USER_ID: str = "userId"
CLAIM_IAT: str = "iat"
CLAIM_EXP: str = "exp"

DEFAULT_TOKEN_TTL_SECONDS: int = 60 * 60


class InvalidTokenError(Exception):
    """Token ausente de claims, mal firmado o expirado."""

    def __init__(self, message: str, *, expired: bool = False):
        super().__init__(message)
        self.expired = expired


# ---------------------------------------------------------------------------
# Tokens JWT (emitir / decodificar)
# ---------------------------------------------------------------------------


def create_access_token(
    user_id: str,
    *,
    secret: str | None = None,
    expires_in_seconds: int = DEFAULT_TOKEN_TTL_SECONDS,
) -> str:
    """Crea un JWT de acceso firmado con claim sub=user_id."""
    now = datetime.now(timezone.utc)
    payload: dict[str, object] = {
        CLAIM_SUB: str(user_id),
        CLAIM_IAT: int(now.timestamp()),
        CLAIM_EXP: int((now + timedelta(seconds=expires_in_seconds)).timestamp()),
    }
    return jwt.encode(
        payload, secret or get_settings().jwt_secret, algorithm=JWT_ALGORITHM
    )


def decode_user_id(token: str, *, secret: str | None = None) -> str:
    """
    Valida el token y devuelve el user_id.

    Errores:
        InvalidTokenError (expired=True si venció).
    """
    try:
        payload = jwt.decode(
            token,
            secret or get_settings().jwt_secret,
            algorithms=[JWT_ALGORITHM],
        )
    except jwt.ExpiredSignatureError as exc:
        raise InvalidTokenError("Token expirado.", expired=True) from exc
    except jwt.InvalidTokenError as exc:
        raise InvalidTokenError("Token inválido.") from exc

    user_id = payload.get(CLAIM_SUB) or payload.get(CLAIM_USER_ID)
    if not user_id:
        raise InvalidTokenError("Token inválido.")
    return str(user_id)


def _extract_bearer_token(authorization: str | None) -> str | None:
    """Extrae token desde `Authorization: Bearer <token>`."""
    if not authorization:
        return None
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    token = parts[1].strip()
    return token or None


# ---------------------------------------------------------------------------
# Dependencias FastAPI
# ---------------------------------------------------------------------------


def require_user_id(
    request: Request,
    authorization: str | None = Header(None, alias="Authorization"),
) -> str:
    """Dependency FastAPI: requiere usuario autenticado por JWT."""
    token = _extract_bearer_token(authorization)
    if not token:
        raise unauthorized("Falta token Bearer.")

    try:
        user_id = decode_user_id(token)
    except InvalidTokenError as exc:
        logger.info("Token rechazado", extra={"expired": exc.expired})
        raise unauthorized(str(exc)) from exc

    request.state.user_id = user_id
    set_user_context(user_id)
    return user_id


def optional_user_id(
    request: Request,
    authorization: str | None = Header(None, alias="Authorization"),
) -> Optional[str]:
    """Dependency FastAPI: user_id si hay token válido; None en otro caso."""
    token = _extract_bearer_token(authorization)
    if not token:
        return None

    try:
        user_id = decode_user_id(token)
    except InvalidTokenError:
        return None

    request.state.user_id = user_id
    set_user_context(user_id)
    return user_id
