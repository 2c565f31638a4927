"""
===============================================================================
USE CASE: Get Like Status
===============================================================================

Business Goal:
    Conteo de likes de un contenido y si el usuario actual (opcional) lo likeó.

Collaborators:
    - LikeRepository: count_by_content, find_by_user_and_content
===============================================================================
"""

from __future__ import annotations

from typing import Optional

from ....crosscutting.exceptions import ValidationError
from ....domain.repositories import LikeRepository
from .social_results import LikeStatus


class GetLikeStatusUseCase:
    def __init__(self, like_repository: LikeRepository) -> None:
        self._likes = like_repository

    def execute(self, content_id: str, user_id: Optional[str] = None) -> LikeStatus:
        if not content_id:
            raise ValidationError("El contenido es obligatorio")

        is_liked = bool(user_id) and (
            self._likes.find_by_user_and_content(user_id, content_id) is not None
        )
        return LikeStatus(
            likes_count=self._likes.count_by_content(content_id),
            is_liked=is_liked,
        )
