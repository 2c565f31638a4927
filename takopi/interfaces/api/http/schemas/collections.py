"""
===============================================================================
TARJETA CRC — schemas/collections.py
===============================================================================

Módulo:
    Schemas HTTP para Colecciones

Responsabilidades:
    - DTOs de request/response para colecciones e items.
    - Mantener contratos estables (fechas ISO-8601).

Notas:
    - Los límites de título/descripción NO se validan acá: los aplica el caso
      de uso para que el mensaje sea siempre el mismo (HTTP o no).
===============================================================================
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class CreateCollectionReq(BaseModel):
    """Request para crear colección."""

    title: str = Field(..., description="Título de la colección")
    description: str | None = Field(default=None, description="Descripción")
    is_public: bool = Field(default=True)


class UpdateCollectionReq(BaseModel):
    """Request para actualizar colección (patch). Campos ausentes no cambian."""

    title: str | None = None
    description: str | None = Field(
        default=None, description='"" borra la descripción'
    )
    is_public: bool | None = None


class AddItemReq(BaseModel):
    content_id: str = Field(..., description="Contenido a agregar")


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class CollectionRes(BaseModel):
    id: str
    user_id: str
    title: str
    description: str | None = None
    is_public: bool
    item_count: int
    created_at: datetime
    updated_at: datetime


class CollectionItemRes(BaseModel):
    id: str
    collection_id: str
    content_id: str
    added_at: datetime


class CollectionItemsRes(BaseModel):
    collection_id: str
    items: list[CollectionItemRes]
    total: int


class CollectionDetailRes(CollectionRes):
    items: list[CollectionItemRes] = Field(default_factory=list)


class CollectionsListRes(BaseModel):
    collections: list[CollectionRes]
    total: int
