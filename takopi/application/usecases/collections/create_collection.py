"""
===============================================================================
USE CASE: Create Collection
===============================================================================

Name:
    Create Collection Use Case

Business Goal:
    Crear una colección vacía para el usuario autenticado.

Why (Context / Intención):
    - Invariantes:
        * título obligatorio, con trim, máximo configurable (50 por defecto)
        * descripción opcional, con trim, máximo configurable (200 por defecto)
        * descripción en blanco se persiste como NULL
    - La validación ocurre completa antes de llamar al repositorio.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    CreateCollectionUseCase

Responsibilities:
    - Validar user_id, título y descripción.
    - Persistir con valores normalizados.

Collaborators:
    - CollectionRepository.create(user_id, title, description, is_public)
    - collection_access.normalize_title / normalize_description

-------------------------------------------------------------------------------
INPUTS / OUTPUTS
-------------------------------------------------------------------------------
Inputs:
    CreateCollectionInput(user_id, title, description=None, is_public=True)
Outputs:
    Collection (item_count = 0)
Errors:
    ValidationError
===============================================================================
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ....crosscutting.exceptions import ValidationError
from ....domain.entities import (
    COLLECTION_DESCRIPTION_MAX_CHARS,
    COLLECTION_TITLE_MAX_CHARS,
    Collection,
)
from ....domain.repositories import CollectionRepository
from .collection_access import normalize_description, normalize_title

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateCollectionInput:
    """DTO de entrada del caso de uso."""

    user_id: str
    title: str
    description: Optional[str] = None
    is_public: bool = True


class CreateCollectionUseCase:
    """
    Use Case (Application Service / Command):
        Valida y persiste una colección nueva.
    """

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

    def execute(self, input_data: CreateCollectionInput) -> Collection:
        # ---------------------------------------------------------------------
        # 1) Validar actor.
        # ---------------------------------------------------------------------
        if not input_data.user_id:
            raise ValidationError("ID de usuario es requerido")

        # ---------------------------------------------------------------------
        # 2) Normalizar y validar campos.
        # ---------------------------------------------------------------------
        title = normalize_title(input_data.title, self._title_max)
        description = normalize_description(
            input_data.description, self._description_max
        )

        # ---------------------------------------------------------------------
        # 3) Persistir.
        # ---------------------------------------------------------------------
        collection = self._collections.create(
            input_data.user_id,
            title,
            description,
            bool(input_data.is_public),
        )
        logger.info(
            "Collection created",
            extra={"collection_id": collection.id, "user_id": input_data.user_id},
        )
        return collection
