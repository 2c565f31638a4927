"""
===============================================================================
USE CASE: Get Pin Status (batch)
===============================================================================

Business Goal:
    Estado de pin para varios contenidos a la vez (grillas de la UI).

Notes:
    - Ids vacíos se descartan; duplicados se consultan una sola vez y el orden
      de la respuesta sigue el de la primera aparición.

Collaborators:
    - PinRepository: count_by_content, find_by_user_and_content
===============================================================================
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from ....domain.repositories import PinRepository
from .social_results import PinStatus


class GetPinStatusUseCase:
    def __init__(self, pin_repository: PinRepository) -> None:
        self._pins = pin_repository

    def execute(
        self, content_ids: Iterable[str], user_id: Optional[str] = None
    ) -> List[PinStatus]:
        unique_ids = list(dict.fromkeys(cid for cid in content_ids if cid))

        statuses: List[PinStatus] = []
        for content_id in unique_ids:
            is_pinned = bool(user_id) and (
                self._pins.find_by_user_and_content(user_id, content_id) is not None
            )
            statuses.append(
                PinStatus(
                    content_id=content_id,
                    pins_count=self._pins.count_by_content(content_id),
                    is_pinned=is_pinned,
                )
            )
        return statuses
