"""
===============================================================================
COLLECTION ACCESS & FIELD RULES (Shared Helpers)
===============================================================================

Name:
    Collection Access Helpers

Business Goal:
    Centralizar las reglas repetidas por los casos de uso de colecciones:
      - normalización + validación de título y descripción
      - carga de la colección con chequeo de existencia y ownership

Why (Context / Intención):
    - Los mensajes de error son contrato con la UI: definirlos una sola vez
      evita variantes inconsistentes entre create/update/add/remove/delete.

-------------------------------------------------------------------------------
CRC CARD (Module-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    collection_access (module)

Responsibilities:
    - normalize_title / normalize_description (trim + límites).
    - load_owned_collection(repo, collection_id, user_id, action).

Collaborators:
    - CollectionRepository.find_by_id
    - crosscutting.exceptions (ValidationError / NotFoundError / ForbiddenError)
===============================================================================
"""

from __future__ import annotations

from typing import Optional

from ....crosscutting.exceptions import ForbiddenError, NotFoundError, ValidationError
from ....domain.entities import (
    COLLECTION_DESCRIPTION_MAX_CHARS,
    COLLECTION_TITLE_MAX_CHARS,
    Collection,
)
from ....domain.repositories import CollectionRepository

COLLECTION_NOT_FOUND_MSG = "Colección no encontrada"


def normalize_title(raw: Optional[str], max_chars: int = COLLECTION_TITLE_MAX_CHARS) -> str:
    """Trim + obligatorio + longitud máxima (medida después del trim)."""
    title = (raw or "").strip()
    if not title:
        raise ValidationError("El título es obligatorio")
    if len(title) > max_chars:
        raise ValidationError(
            f"El título no puede tener más de {max_chars} caracteres"
        )
    return title


def normalize_description(
    raw: Optional[str], max_chars: int = COLLECTION_DESCRIPTION_MAX_CHARS
) -> Optional[str]:
    """Trim; en blanco -> None."""
    description = (raw or "").strip()
    if len(description) > max_chars:
        raise ValidationError(
            f"La descripción no puede tener más de {max_chars} caracteres"
        )
    return description or None


def load_owned_collection(
    collections: CollectionRepository,
    collection_id: str,
    user_id: Optional[str],
    *,
    action: str,
) -> Collection:
    """
    Carga la colección y exige ownership.

    action completa el mensaje: "No tienes permiso para <action> esta colección".
    """
    collection = collections.find_by_id(collection_id) if collection_id else None
    if collection is None:
        raise NotFoundError(COLLECTION_NOT_FOUND_MSG)
    if not collection.is_owned_by(user_id):
        raise ForbiddenError(f"No tienes permiso para {action} esta colección")
    return collection
