"""
===============================================================================
USE CASE: List User Pins
===============================================================================

Business Goal:
    Mostrar los pins (guardados) de un usuario en su perfil.

Notes:
    - El dueño ve todos sus pins; cualquier otro viewer (o anónimo) solo los
      públicos. El total usa el mismo filtro que el listado.

Collaborators:
    - PinRepository: find_by_user, count_by_user
===============================================================================
"""

from __future__ import annotations

from typing import Optional

from ....crosscutting.exceptions import ValidationError
from ....domain.repositories import PinRepository
from .social_results import UserPins


class ListUserPinsUseCase:
    def __init__(self, pin_repository: PinRepository) -> None:
        self._pins = pin_repository

    def execute(self, user_id: str, viewer_id: Optional[str] = None) -> UserPins:
        if not user_id:
            raise ValidationError("ID de usuario es requerido")

        public_only = viewer_id != user_id
        return UserPins(
            pins=self._pins.find_by_user(user_id, public_only=public_only),
            total=self._pins.count_by_user(user_id, public_only=public_only),
            public_only=public_only,
        )
