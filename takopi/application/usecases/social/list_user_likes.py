"""
===============================================================================
USE CASE: List User Likes
===============================================================================

Business Goal:
    Contenidos que un usuario likeó (newest first).

Collaborators:
    - LikeRepository: find_by_user
===============================================================================
"""

from __future__ import annotations

from typing import List

from ....crosscutting.exceptions import ValidationError
from ....domain.entities import Like
from ....domain.repositories import LikeRepository


class ListUserLikesUseCase:
    def __init__(self, like_repository: LikeRepository) -> None:
        self._likes = like_repository

    def execute(self, user_id: str) -> List[Like]:
        if not user_id:
            raise ValidationError("ID de usuario es requerido")
        return self._likes.find_by_user(user_id)
