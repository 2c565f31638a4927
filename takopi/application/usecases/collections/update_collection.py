"""
===============================================================================
USE CASE: Update Collection
===============================================================================

Name:
    Update Collection Use Case

Business Goal:
    Editar título, descripción y/o visibilidad de una colección propia.

Why (Context / Intención):
    - Solo se re-validan los campos presentes en el input.
    - Descripción en blanco significa "borrar descripción".
    - Un no-dueño nunca modifica nada (Forbidden antes de escribir).

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    UpdateCollectionUseCase

Responsibilities:
    - Cargar la colección y validar existencia + ownership.
    - Normalizar los campos presentes y armar CollectionChanges.
    - Persistir y devolver la colección actualizada.

Collaborators:
    - CollectionRepository: find_by_id, update
    - collection_access helpers

Errors:
    - NotFoundError("Colección no encontrada")
    - ForbiddenError("No tienes permiso para editar esta colección")
    - ValidationError (título / descripción)
===============================================================================
"""

from __future__ import annotations

import logging

from ....crosscutting.exceptions import NotFoundError
from ....domain.entities import (
    COLLECTION_DESCRIPTION_MAX_CHARS,
    COLLECTION_TITLE_MAX_CHARS,
    Collection,
    CollectionChanges,
)
from ....domain.repositories import CollectionRepository
from .collection_access import (
    COLLECTION_NOT_FOUND_MSG,
    load_owned_collection,
    normalize_description,
    normalize_title,
)
from .collection_results import UpdateCollectionInput

logger = logging.getLogger(__name__)


class UpdateCollectionUseCase:
    """Use Case (Command): edición parcial restringida al dueño."""

    def __init__(
        self,
        collection_repository: CollectionRepository,
        *,
        title_max_chars: int = COLLECTION_TITLE_MAX_CHARS,
        description_max_chars: int = COLLECTION_DESCRIPTION_MAX_CHARS,
    ) -> None:
        self._collections = collection_repository
        self._title_max = title_max_chars
        self._description_max = description_max_chars

    def execute(
        self,
        collection_id: str,
        user_id: str,
        input_data: UpdateCollectionInput,
    ) -> Collection:
        # ---------------------------------------------------------------------
        # 1) Existencia + ownership.
        # ---------------------------------------------------------------------
        current = load_owned_collection(
            self._collections, collection_id, user_id, action="editar"
        )

        # ---------------------------------------------------------------------
        # 2) Validar solo lo presente.
        # ---------------------------------------------------------------------
        changes = self._build_changes(input_data)
        if changes.is_empty:
            return current

        # ---------------------------------------------------------------------
        # 3) Persistir.
        # ---------------------------------------------------------------------
        updated = self._collections.update(collection_id, changes)
        if updated is None:
            # Borrada entre la lectura y la escritura.
            raise NotFoundError(COLLECTION_NOT_FOUND_MSG)

        logger.info(
            "Collection updated",
            extra={"collection_id": collection_id, "user_id": user_id},
        )
        return updated

    def _build_changes(self, input_data: UpdateCollectionInput) -> CollectionChanges:
        title = (
            normalize_title(input_data.title, self._title_max)
            if input_data.title is not None
            else None
        )

        description = None
        clear_description = False
        if input_data.description is not None:
            description = normalize_description(
                input_data.description, self._description_max
            )
            clear_description = description is None

        return CollectionChanges(
            title=title,
            description=description,
            is_public=input_data.is_public,
            clear_description=clear_description,
        )
