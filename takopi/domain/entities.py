"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidades del Dominio (Follow, Like, Pin, Collection, CollectionItem)

Responsabilidades:
    - Definir estructuras centrales del negocio social y de colecciones.
    - Exponer predicados puros (ownership, visibilidad, pertenencia).
    - Mantener tipos claros para casos de uso y repositorios.

Colaboradores:
    - domain.repositories: construyen estas entidades desde registros persistidos.
    - application/usecases: consumen predicados para validar reglas.
    - interfaces/api: serializan a DTOs (fechas ISO-8601).

Principios:
    - Inmutables (frozen): solo los repositorios las construyen.
    - Sin dependencias a DB/FastAPI; ningún método hace I/O.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

COLLECTION_TITLE_MAX_CHARS = 50
COLLECTION_DESCRIPTION_MAX_CHARS = 200


def utcnow() -> datetime:
    """Fecha/hora UTC (fuente única de tiempo para repositorios)."""
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Social: Follow
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Follow:
    """
    Arista dirigida follower -> following.

    Invariantes (garantizadas por el storage + ToggleFollow):
      - (follower_id, following_id) único
      - follower_id != following_id
    """

    id: str
    follower_id: str
    following_id: str
    created_at: datetime

    def is_follower(self, user_id: str) -> bool:
        """True si user_id es quien sigue."""
        return self.follower_id == user_id

    def is_following(self, user_id: str) -> bool:
        """True si user_id es el usuario seguido."""
        return self.following_id == user_id


# ---------------------------------------------------------------------------
# Social: Like / Pin
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Like:
    """Like de un usuario sobre un contenido. (user_id, content_id) único."""

    id: str
    user_id: str
    content_id: str
    created_at: datetime

    def is_by_user(self, user_id: str) -> bool:
        return self.user_id == user_id

    def is_for_content(self, content_id: str) -> bool:
        return self.content_id == content_id


@dataclass(frozen=True)
class Pin:
    """
    Pin (guardado) de un contenido por un usuario.

    is_public decide si aparece en el perfil público del usuario.
    """

    id: str
    user_id: str
    content_id: str
    is_public: bool
    created_at: datetime

    def is_by_user(self, user_id: str) -> bool:
        return self.user_id == user_id

    def is_for_content(self, content_id: str) -> bool:
        return self.content_id == content_id


# ---------------------------------------------------------------------------
# Collections
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Collection:
    """
    Agrupación de contenidos propiedad de un usuario.

    Notas:
      - item_count es derivado (lo calcula el repositorio).
      - updated_at se actualiza en cada edición y en cada alta/baja de item.
    """

    id: str
    user_id: str
    title: str
    description: Optional[str]
    is_public: bool
    item_count: int
    created_at: datetime
    updated_at: datetime

    def is_private(self) -> bool:
        return not self.is_public

    def is_owned_by(self, user_id: Optional[str]) -> bool:
        return user_id is not None and self.user_id == user_id

    def can_be_viewed_by(self, user_id: Optional[str]) -> bool:
        """
        Regla de visibilidad:
          - pública -> cualquiera (incluido anónimo)
          - privada -> solo el dueño
        """
        if self.is_public:
            return True
        return self.is_owned_by(user_id)


@dataclass(frozen=True)
class CollectionItem:
    """Pertenencia de un contenido a una colección. (collection_id, content_id) único."""

    id: str
    collection_id: str
    content_id: str
    added_at: datetime


@dataclass(frozen=True)
class CollectionChanges:
    """
    Cambios parciales de una colección.

    - None significa "sin cambios" para cada campo.
    - clear_description=True pone description en NULL explícitamente.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    is_public: Optional[bool] = None
    clear_description: bool = False

    @property
    def is_empty(self) -> bool:
        return (
            self.title is None
            and self.description is None
            and self.is_public is None
            and not self.clear_description
        )
