"""
===============================================================================
USE CASE: Get Collection (detail)
===============================================================================

Business Goal:
    Devolver una colección con sus items aplicando la regla de visibilidad:
      - pública -> cualquiera (incluido anónimo)
      - privada -> solo el dueño

Collaborators:
    - CollectionRepository: find_by_id, get_items
    - domain.entities.Collection.can_be_viewed_by

Errors:
    - NotFoundError("Colección no encontrada")
    - ForbiddenError("No tienes permiso para ver esta colección")
===============================================================================
"""

from __future__ import annotations

from typing import Optional

from ....crosscutting.exceptions import ForbiddenError, NotFoundError
from ....domain.repositories import CollectionRepository
from .collection_access import COLLECTION_NOT_FOUND_MSG
from .collection_results import CollectionDetail


class GetCollectionUseCase:
    """Use Case (Query): detalle con chequeo de visibilidad."""

    def __init__(self, collection_repository: CollectionRepository) -> None:
        self._collections = collection_repository

    def execute(
        self, collection_id: str, viewer_id: Optional[str] = None
    ) -> CollectionDetail:
        collection = (
            self._collections.find_by_id(collection_id) if collection_id else None
        )
        if collection is None:
            raise NotFoundError(COLLECTION_NOT_FOUND_MSG)

        if not collection.can_be_viewed_by(viewer_id):
            raise ForbiddenError("No tienes permiso para ver esta colección")

        return CollectionDetail(
            collection=collection,
            items=self._collections.get_items(collection.id),
        )
