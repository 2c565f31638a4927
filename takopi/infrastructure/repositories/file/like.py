"""
============================================================
TARJETA CRC — infrastructure/repositories/file/like.py
============================================================
Class: FileLikeRepository

Responsibilities:
- Persistir likes en la colección "likes" del file store.
- Clave natural (userId, contentId) validada por el store.
============================================================
"""

from __future__ import annotations

from typing import List, Optional

from ....domain.entities import Like
from ...storage.file_store import Record
from .base import FileRepository, record_id


class FileLikeRepository(FileRepository):
    """R: LikeRepository sobre JsonFileStore."""

    COLLECTION = "likes"

    def _to_entity(self, record: Record) -> Like:
        return Like(
            id=record_id(record),
            user_id=record["userId"],
            content_id=record["contentId"],
            created_at=self._ts(record),
        )

    def _entities(self, records: list[Record]) -> List[Like]:
        return [self._to_entity(r) for r in self._newest_first(records)]

    def find_by_id(self, like_id: str) -> Optional[Like]:
        record = self._get(like_id)
        return self._to_entity(record) if record else None

    def find_by_user(self, user_id: str) -> List[Like]:
        return self._entities(self._where({"userId": user_id}))

    def find_by_content(self, content_id: str) -> List[Like]:
        return self._entities(self._where({"contentId": content_id}))

    def find_by_user_and_content(self, user_id: str, content_id: str) -> Optional[Like]:
        record = self._first({"userId": user_id, "contentId": content_id})
        return self._to_entity(record) if record else None

    def create(self, user_id: str, content_id: str) -> Like:
        record = self._store.create(
            self.COLLECTION,
            {"userId": user_id, "contentId": content_id},
            unique_on=("userId", "contentId"),
            id_prefix="like",
        )
        return self._to_entity(record)

    def delete(self, like_id: str) -> bool:
        with self._store.locked():
            if self._get(like_id) is None:
                return False
            return self._store.delete(self.COLLECTION, like_id)

    def count_by_content(self, content_id: str) -> int:
        return self._count({"contentId": content_id})
