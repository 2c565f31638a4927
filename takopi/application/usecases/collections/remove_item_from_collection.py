"""
===============================================================================
USE CASE: Remove Item From Collection
===============================================================================

Business Goal:
    Quitar un contenido de una colección propia. Quitar algo que no está es
    un no-op exitoso (idempotente).

Collaborators:
    - CollectionRepository: find_by_id, remove_item

Errors:
    - ValidationError("El contenido es obligatorio")
    - NotFoundError / ForbiddenError("No tienes permiso para modificar esta colección")
===============================================================================
"""

from __future__ import annotations

import logging

from ....crosscutting.exceptions import ValidationError
from ....domain.repositories import CollectionRepository
from .collection_access import load_owned_collection

logger = logging.getLogger(__name__)


class RemoveItemFromCollectionUseCase:
    def __init__(self, collection_repository: CollectionRepository) -> None:
        self._collections = collection_repository

    def execute(self, collection_id: str, content_id: str, user_id: str) -> None:
        if not content_id:
            raise ValidationError("El contenido es obligatorio")

        load_owned_collection(
            self._collections, collection_id, user_id, action="modificar"
        )

        removed = self._collections.remove_item(collection_id, content_id)
        logger.info(
            "Collection item removed",
            extra={
                "collection_id": collection_id,
                "content_id": content_id,
                "removed": removed,
            },
        )
