"""
===============================================================================
USE CASE: Get Follow Status
===============================================================================

Business Goal:
    Informar si viewer sigue a target, junto con los contadores del perfil
    de target (seguidores / seguidos).

Collaborators:
    - FollowRepository: find_by_users, count_by_following, count_by_follower
===============================================================================
"""

from __future__ import annotations

from ....crosscutting.exceptions import ValidationError
from ....domain.repositories import FollowRepository
from .social_results import FollowStatus


class GetFollowStatusUseCase:
    def __init__(self, follow_repository: FollowRepository) -> None:
        self._follows = follow_repository

    def execute(self, viewer_id: str, target_id: str) -> FollowStatus:
        if not target_id:
            raise ValidationError("ID del usuario a seguir es requerido")

        # Sin viewer (o viewer == target) nunca hay arista propia.
        is_following = bool(viewer_id) and viewer_id != target_id and (
            self._follows.find_by_users(viewer_id, target_id) is not None
        )

        return FollowStatus(
            is_following=is_following,
            followers_count=self._follows.count_by_following(target_id),
            following_count=self._follows.count_by_follower(target_id),
        )
