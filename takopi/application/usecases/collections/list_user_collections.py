"""
===============================================================================
USE CASE: List User Collections
===============================================================================

Business Goal:
    Listar las colecciones de un usuario visibles para el viewer:
      - el dueño ve todas
      - cualquier otro (o anónimo) ve solo las públicas

Collaborators:
    - CollectionRepository.find_by_user (más recientemente actualizadas primero)
===============================================================================
"""

from __future__ import annotations

from typing import List, Optional

from ....crosscutting.exceptions import ValidationError
from ....domain.entities import Collection
from ....domain.repositories import CollectionRepository


class ListUserCollectionsUseCase:
    def __init__(self, collection_repository: CollectionRepository) -> None:
        self._collections = collection_repository

    def execute(
        self, owner_id: str, viewer_id: Optional[str] = None
    ) -> List[Collection]:
        if not owner_id:
            raise ValidationError("ID de usuario es requerido")

        return [
            c
            for c in self._collections.find_by_user(owner_id)
            if c.can_be_viewed_by(viewer_id)
        ]
