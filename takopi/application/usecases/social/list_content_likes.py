"""USE CASE: usuarios que likearon un contenido (newest first)."""

from __future__ import annotations

from typing import List

from ....crosscutting.exceptions import ValidationError
from ....domain.entities import Like
from ....domain.repositories import LikeRepository


class ListContentLikesUseCase:
    def __init__(self, like_repository: LikeRepository) -> None:
        self._likes = like_repository

    def execute(self, content_id: str) -> List[Like]:
        if not content_id:
            raise ValidationError("El contenido es obligatorio")
        return self._likes.find_by_content(content_id)
