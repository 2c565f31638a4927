"""Identidad: autenticación JWT para la API HTTP."""

from .auth import (
    InvalidTokenError,
    create_access_token,
    decode_user_id,
    optional_user_id,
    require_user_id,
)

__all__ = [
    "InvalidTokenError",
    "create_access_token",
    "decode_user_id",
    "require_user_id",
    "optional_user_id",
]
