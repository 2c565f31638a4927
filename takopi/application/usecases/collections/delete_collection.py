"""
===============================================================================
USE CASE: Delete Collection
===============================================================================

Business Goal:
    Borrar (hard delete) una colección propia junto con sus items.

Collaborators:
    - CollectionRepository: find_by_id, delete (cascada sobre items)

Errors:
    - NotFoundError("Colección no encontrada")
    - ForbiddenError("No tienes permiso para eliminar esta colección")
===============================================================================
"""

from __future__ import annotations

import logging

from ....domain.repositories import CollectionRepository
from .collection_access import load_owned_collection

logger = logging.getLogger(__name__)


class DeleteCollectionUseCase:
    def __init__(self, collection_repository: CollectionRepository) -> None:
        self._collections = collection_repository

    def execute(self, collection_id: str, user_id: str) -> None:
        load_owned_collection(
            self._collections, collection_id, user_id, action="eliminar"
        )
        self._collections.delete(collection_id)
        logger.info(
            "Collection deleted",
            extra={"collection_id": collection_id, "user_id": user_id},
        )
