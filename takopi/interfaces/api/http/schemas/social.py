"""
===============================================================================
TARJETA CRC — schemas/social.py
===============================================================================

Módulo:
    Schemas HTTP para follows, likes y pins

Responsabilidades:
    - DTOs de request/response de los endpoints sociales.
    - Normalizar ids (strip); las reglas de negocio viven en los casos de uso.

Colaboradores:
    - application.usecases.social (FollowListKind)
===============================================================================
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from .....application.usecases.social import FollowListKind


def _strip(v: str | None) -> str | None:
    return v.strip() if isinstance(v, str) else v


# -----------------------------------------------------------------------------
# Follows
# -----------------------------------------------------------------------------
class ToggleFollowReq(BaseModel):
    """Request para seguir / dejar de seguir."""

    following_id: str = Field(..., description="Usuario a seguir")

    @field_validator("following_id")
    @classmethod
    def strip_id(cls, v: str) -> str:
        return _strip(v)


class ToggleFollowRes(BaseModel):
    is_following: bool
    follow_id: str | None = None


class FollowStatusRes(BaseModel):
    is_following: bool
    followers_count: int
    following_count: int


class FollowEntryRes(BaseModel):
    user_id: str
    followed_at: datetime
    is_following: bool
    is_me: bool


class FollowListRes(BaseModel):
    user_id: str
    type: FollowListKind
    items: list[FollowEntryRes]
    total: int


# -----------------------------------------------------------------------------
# Likes
# -----------------------------------------------------------------------------
class ToggleLikeReq(BaseModel):
    content_id: str = Field(..., description="Contenido a likear")

    @field_validator("content_id")
    @classmethod
    def strip_id(cls, v: str) -> str:
        return _strip(v)


class ToggleLikeRes(BaseModel):
    liked: bool
    likes_count: int


class LikeStatusRes(BaseModel):
    content_id: str
    likes_count: int
    is_liked: bool


class LikeEntryRes(BaseModel):
    user_id: str
    content_id: str
    liked_at: datetime


class LikeListRes(BaseModel):
    """Listado de likes (por usuario o por contenido)."""

    items: list[LikeEntryRes]
    total: int


# -----------------------------------------------------------------------------
# Pins
# -----------------------------------------------------------------------------
class TogglePinReq(BaseModel):
    content_id: str = Field(..., description="Contenido a guardar")
    is_public: bool = Field(default=True, description="Visible en el perfil público")

    @field_validator("content_id")
    @classmethod
    def strip_id(cls, v: str) -> str:
        return _strip(v)


class TogglePinRes(BaseModel):
    pinned: bool
    pins_count: int


class PinStatusRes(BaseModel):
    content_id: str
    pins_count: int
    is_pinned: bool


class PinStatusListRes(BaseModel):
    items: list[PinStatusRes]


class PinEntryRes(BaseModel):
    content_id: str
    is_public: bool
    pinned_at: datetime


class UserPinsRes(BaseModel):
    user_id: str
    items: list[PinEntryRes]
    total: int
