"""
===============================================================================
USE CASE: Toggle Pin
===============================================================================

Business Goal:
    Guardar (pin) o quitar un contenido de los guardados del usuario.
    is_public decide si el pin aparece en su perfil público.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    TogglePinUseCase

Responsibilities:
    - Validar ids; crear o borrar por clave natural; re-leer pins_count.

Collaborators:
    - PinRepository:
        find_by_user_and_content, create, delete, count_by_content
===============================================================================
"""

from __future__ import annotations

import logging

from ....crosscutting.exceptions import ValidationError
from ....domain.repositories import PinRepository
from .social_results import TogglePinResult

logger = logging.getLogger(__name__)


class TogglePinUseCase:
    def __init__(self, pin_repository: PinRepository) -> None:
        self._pins = pin_repository

    def execute(
        self, user_id: str, content_id: str, is_public: bool = True
    ) -> TogglePinResult:
        if not user_id or not content_id:
            raise ValidationError("Usuario y contenido son requeridos")

        existing = self._pins.find_by_user_and_content(user_id, content_id)

        if existing is not None:
            # Borrado por clave natural.
            self._pins.delete(user_id, content_id)
            pinned = False
        else:
            self._pins.create(user_id, content_id, is_public)
            pinned = True

        logger.info(
            "Pin" if pinned else "Unpin",
            extra={"user_id": user_id, "content_id": content_id},
        )
        return TogglePinResult(
            pinned=pinned,
            pins_count=self._pins.count_by_content(content_id),
        )
