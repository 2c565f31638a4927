"""
===============================================================================
USE CASE: Toggle Like
===============================================================================

Name:
    Toggle Like Use Case

Business Goal:
    Dar o quitar un like sobre un contenido y devolver el conteo actualizado.

Why (Context / Intención):
    - El conteo se re-lee del storage DESPUÉS de mutar: nunca se calcula
      sumando/restando en memoria (otro usuario pudo haber likeado en paralelo).

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    ToggleLikeUseCase

Responsibilities:
    - Validar user_id y content_id.
    - Crear o borrar el like por clave natural (user_id, content_id).
    - Re-leer likes_count.

Collaborators:
    - LikeRepository:
        find_by_user_and_content, create, delete, count_by_content
===============================================================================
"""

from __future__ import annotations

import logging

from ....crosscutting.exceptions import ValidationError
from ....domain.repositories import LikeRepository
from .social_results import ToggleLikeResult

logger = logging.getLogger(__name__)


class ToggleLikeUseCase:
    """Use Case (Command): like/unlike con conteo fresco."""

    def __init__(self, like_repository: LikeRepository) -> None:
        self._likes = like_repository

    def execute(self, user_id: str, content_id: str) -> ToggleLikeResult:
        if not user_id or not content_id:
            raise ValidationError("Usuario y contenido son requeridos")

        existing = self._likes.find_by_user_and_content(user_id, content_id)

        if existing is not None:
            self._likes.delete(existing.id)
            liked = False
        else:
            self._likes.create(user_id, content_id)
            liked = True

        logger.info(
            "Like" if liked else "Unlike",
            extra={"user_id": user_id, "content_id": content_id},
        )
        return ToggleLikeResult(
            liked=liked,
            likes_count=self._likes.count_by_content(content_id),
        )
