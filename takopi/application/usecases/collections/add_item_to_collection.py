"""
===============================================================================
USE CASE: Add Item To Collection
===============================================================================

Name:
    Add Item To Collection Use Case

Business Goal:
    Agregar un contenido a una colección propia.

Why (Context / Intención):
    - Un contenido aparece a lo sumo una vez por colección.
    - El chequeo previo da un mensaje claro; si un alta concurrente gana la
      carrera, el storage igual rechaza el duplicado con ConflictError.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    AddItemToCollectionUseCase

Responsibilities:
    - Validar content_id.
    - Existencia + ownership de la colección.
    - Rechazar duplicados.
    - Delegar el alta (el repositorio actualiza updated_at del padre).

Collaborators:
    - CollectionRepository: find_by_id, is_item_in_collection, add_item

Errors:
    - ValidationError("El contenido es obligatorio")
    - NotFoundError / ForbiddenError("No tienes permiso para modificar esta colección")
    - ConflictError("Este producto ya está en la colección")
===============================================================================
"""

from __future__ import annotations

import logging

from ....crosscutting.exceptions import ConflictError, ValidationError
from ....domain.entities import CollectionItem
from ....domain.repositories import CollectionRepository
from .collection_access import load_owned_collection

logger = logging.getLogger(__name__)

DUPLICATE_ITEM_MSG = "Este producto ya está en la colección"


class AddItemToCollectionUseCase:
    """Use Case (Command): alta de item con unicidad por colección."""

    def __init__(self, collection_repository: CollectionRepository) -> None:
        self._collections = collection_repository

    def execute(
        self, collection_id: str, content_id: str, user_id: str
    ) -> CollectionItem:
        # ---------------------------------------------------------------------
        # 1) Validar input.
        # ---------------------------------------------------------------------
        if not content_id:
            raise ValidationError("El contenido es obligatorio")

        # ---------------------------------------------------------------------
        # 2) Existencia + ownership.
        # ---------------------------------------------------------------------
        load_owned_collection(
            self._collections, collection_id, user_id, action="modificar"
        )

        # ---------------------------------------------------------------------
        # 3) Unicidad.
        # ---------------------------------------------------------------------
        if self._collections.is_item_in_collection(collection_id, content_id):
            raise ConflictError(DUPLICATE_ITEM_MSG)

        # ---------------------------------------------------------------------
        # 4) Persistir.
        # ---------------------------------------------------------------------
        item = self._collections.add_item(collection_id, content_id)
        logger.info(
            "Collection item added",
            extra={"collection_id": collection_id, "content_id": content_id},
        )
        return item
